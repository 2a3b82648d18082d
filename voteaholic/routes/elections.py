from flask import jsonify, request

from voteaholic.errors import ValidationError
from voteaholic.services import elections as election_service
from voteaholic.services.security import current_actor


def register_election_routes(app):
    @app.route("/elections", methods=["GET"])
    def list_elections():
        return jsonify([election.to_dict() for election in election_service.list_elections()])

    @app.route("/elections", methods=["POST"])
    def create_election():
        data = request.get_json(silent=True) or {}
        election = election_service.create_election(
            current_actor(),
            data.get("title"),
            description=data.get("description"),
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            status=data.get("status"),
        )
        payload = election.to_dict()
        payload["message"] = "Election created successfully"
        return jsonify(payload), 201

    @app.route("/elections/<election_id>", methods=["GET"])
    def election_detail(election_id):
        election = election_service.get_election(election_id)
        return jsonify(election.to_dict(include_candidates=True))

    @app.route("/elections/<election_id>", methods=["PUT"])
    def update_election(election_id):
        data = request.get_json(silent=True) or {}

        fields = {}
        for key, field in (
            ("title", "title"),
            ("description", "description"),
            ("startDate", "start_date"),
            ("endDate", "end_date"),
        ):
            if key in data:
                fields[field] = data[key]

        if data.get("status"):
            fields["status"] = data["status"]

        election_service.update_election(current_actor(), election_id, **fields)

        return jsonify({"message": "Election updated successfully"})

    @app.route("/elections/<election_id>/status", methods=["POST"])
    def change_election_status(election_id):
        data = request.get_json(silent=True) or {}
        status = data.get("status")
        if status is None or status == "":
            raise ValidationError("status is required")

        election = election_service.transition_election(current_actor(), election_id, status)
        return jsonify(election.to_dict())

    @app.route("/elections/<election_id>", methods=["DELETE"])
    def delete_election(election_id):
        election_service.delete_election(current_actor(), election_id)
        return jsonify({"message": "Election deleted successfully"})

    @app.route("/elections/creator/<creator_id>")
    def elections_by_creator(creator_id):
        elections = election_service.list_elections_by_creator(creator_id)
        return jsonify([election.to_dict() for election in elections])
