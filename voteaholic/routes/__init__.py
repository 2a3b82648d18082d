from flask import jsonify

from voteaholic.models.base import utcnow
from voteaholic.routes.candidates import register_candidate_routes
from voteaholic.routes.elections import register_election_routes
from voteaholic.routes.users import register_user_routes
from voteaholic.routes.votes import register_vote_routes


def register_routes(app):
    @app.route("/health")
    def health():
        return jsonify({"status": "API is running", "timestamp": utcnow().isoformat()})

    register_user_routes(app)
    register_election_routes(app)
    register_candidate_routes(app)
    register_vote_routes(app)
