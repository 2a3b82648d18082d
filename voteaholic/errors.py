"""Error kinds raised by the voting services and their JSON rendering."""

from flask import jsonify
from werkzeug.exceptions import HTTPException


class VotingError(Exception):
    status_code = 500
    code = "error"
    message = "Voting request failed."

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self):
        return {"error": self.message, "code": self.code}


class ValidationError(VotingError):
    status_code = 400
    code = "validation_error"
    message = "Invalid request."


class NotFound(VotingError):
    status_code = 404
    code = "not_found"
    message = "Not found."


class ElectionNotFound(NotFound):
    code = "election_not_found"
    message = "Election not found"


class CandidateNotFound(NotFound):
    code = "candidate_not_found"
    message = "Candidate not found"


class VoteNotFound(NotFound):
    code = "vote_not_found"
    message = "Vote not found"


class UserNotFound(NotFound):
    code = "user_not_found"
    message = "User not found"


class Conflict(VotingError):
    status_code = 400
    code = "conflict"
    message = "Request conflicts with the current state."


class DuplicateVote(Conflict):
    code = "duplicate_vote"
    message = "You have already voted in this election"


class ElectionNotActive(Conflict):
    code = "election_not_active"

    def __init__(self, status):
        self.status = status
        super().__init__(
            f"Election is not active. Current status: {status}. "
            "Voting is only allowed in active elections."
        )


class InvalidStatusTransition(Conflict):
    code = "invalid_status_transition"

    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot change election status from {current} to {requested}."
        )


class UserExists(Conflict):
    code = "user_exists"
    message = "Username or email already exists"


class Unauthorized(VotingError):
    status_code = 401
    code = "unauthorized"
    message = "Authentication required."


class Forbidden(VotingError):
    status_code = 403
    code = "forbidden"
    message = "Admin access required. Only administrators can perform this action."


class InternalError(VotingError):
    status_code = 500
    code = "internal_error"
    message = "Internal server error"


def register_error_handlers(app):
    @app.errorhandler(VotingError)
    def handle_voting_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"error": error.description, "code": error.name.lower().replace(" ", "_")}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        app.logger.exception("Unhandled error: %s", error)
        return jsonify(InternalError().to_dict()), 500
