from voteaholic.models.candidate import Candidate
from voteaholic.models.election import Election
from voteaholic.models.user import User
from voteaholic.models.vote import Vote
from voteaholic.models.voter import Voter

__all__ = [
    "User",
    "Election",
    "Candidate",
    "Vote",
    "Voter",
]
