from voteaholic.services.voting.gate import can_accept_vote
from voteaholic.services.voting.service import (
    audit_tally,
    cast_vote,
    clear_votes,
    delete_vote,
    get_results,
    has_voted,
    recount_tally,
    register_voter,
    voting_stats,
)

__all__ = [
    "audit_tally",
    "can_accept_vote",
    "cast_vote",
    "clear_votes",
    "delete_vote",
    "get_results",
    "has_voted",
    "recount_tally",
    "register_voter",
    "voting_stats",
]
