from flask import jsonify, request

from voteaholic.services import elections as election_service
from voteaholic.services.security import current_actor


def register_candidate_routes(app):
    @app.route("/candidates", methods=["GET"])
    def list_candidates():
        return jsonify([c.to_dict() for c in election_service.list_candidates()])

    @app.route("/candidates", methods=["POST"])
    def create_candidate():
        data = request.get_json(silent=True) or {}
        candidate = election_service.add_candidate(
            current_actor(),
            data.get("electionId"),
            data.get("name"),
            party=data.get("party"),
            bio=data.get("bio"),
            image=data.get("image"),
        )
        return jsonify(candidate.to_dict()), 201

    @app.route("/candidates/election/<election_id>")
    def election_candidates(election_id):
        candidates = election_service.list_candidates(election_id)
        return jsonify([c.to_dict() for c in candidates])

    @app.route("/candidates/<candidate_id>", methods=["PUT"])
    def update_candidate(candidate_id):
        data = request.get_json(silent=True) or {}
        election_service.update_candidate(
            current_actor(),
            candidate_id,
            name=data.get("name"),
            party=data.get("party"),
            bio=data.get("bio"),
            image=data.get("image"),
        )
        return jsonify({"message": "Candidate updated successfully"})

    @app.route("/candidates/<candidate_id>", methods=["DELETE"])
    def delete_candidate(candidate_id):
        election_service.delete_candidate(current_actor(), candidate_id)
        return jsonify({"message": "Candidate deleted successfully"})
