from flask import current_app, jsonify, request

from voteaholic.services.security import current_actor, require_admin
from voteaholic.services.voting import (
    cast_vote,
    clear_votes,
    delete_vote,
    get_results,
    has_voted,
)
from voteaholic.services.voting.ledger import list_votes


def register_vote_routes(app):
    def guard_reset():
        # Open by default to keep the existing client contract.
        if current_app.config.get("ADMIN_RESET_REQUIRES_AUTH"):
            require_admin(current_actor())

    @app.route("/votes", methods=["GET"])
    def all_votes():
        return jsonify(list_votes())

    @app.route("/votes", methods=["POST"])
    def create_vote():
        data = request.get_json(silent=True) or {}
        vote = cast_vote(
            data.get("electionId"),
            data.get("candidateId"),
            data.get("voterId"),
        )
        return (
            jsonify(
                {
                    "id": vote.id,
                    "electionId": vote.election_id,
                    "candidateId": vote.candidate_id,
                    "voterId": vote.voter_id,
                    "message": "Vote recorded successfully",
                }
            ),
            201,
        )

    @app.route("/votes/results/<election_id>")
    def vote_results(election_id):
        return jsonify(get_results(election_id))

    @app.route("/votes/check/<election_id>/<voter_id>")
    def check_vote(election_id, voter_id):
        return jsonify({"hasVoted": has_voted(election_id, voter_id)})

    @app.route("/votes/election/<election_id>")
    def election_votes(election_id):
        return jsonify(list_votes(election_id))

    @app.route("/votes/admin/clear", methods=["POST"])
    def clear_all_votes():
        guard_reset()
        removed = clear_votes()
        return jsonify({"message": "All votes cleared successfully", "removed": removed})

    @app.route("/votes/admin/clear/<election_id>", methods=["POST"])
    def clear_election_votes(election_id):
        guard_reset()
        removed = clear_votes(election_id)
        return jsonify(
            {"message": f"Votes cleared for election {election_id}", "removed": removed}
        )

    @app.route("/votes/<vote_id>", methods=["DELETE"])
    def remove_vote(vote_id):
        delete_vote(vote_id)
        return jsonify({"message": "Vote deleted successfully"})
