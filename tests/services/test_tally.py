import pytest

from voteaholic.extensions import db
from voteaholic.models import Candidate
from voteaholic.services.voting import audit_tally, cast_vote, get_results, recount_tally


def test_results_are_ordered_and_totalled(make_election, make_voters):
    election, (alice, bob, carol) = make_election(candidates=("Alice", "Bob", "Carol"))
    voters = make_voters(5)

    for voter_id in voters[:3]:
        cast_vote(election.id, carol.id, voter_id)
    for voter_id in voters[3:]:
        cast_vote(election.id, alice.id, voter_id)

    results = get_results(election.id)

    assert [row["name"] for row in results["candidates"]] == ["Carol", "Alice", "Bob"]
    assert results["totalVotes"] == 5
    assert results["totalVotes"] == sum(row["voteCount"] for row in results["candidates"])
    assert results["candidates"][0]["percent"] == pytest.approx(60.0)
    assert results["candidates"][0]["party"] == "Carol Party"
    assert results["winners"] == [carol.id]
    assert results["isTie"] is False


def test_empty_election_has_no_winner(make_election):
    election, _ = make_election(status="draft")

    results = get_results(election.id)

    assert results["totalVotes"] == 0
    assert [row["voteCount"] for row in results["candidates"]] == [0, 0]
    assert results["winners"] == []


def test_tie_is_reported(make_election, make_voters):
    election, (alice, bob) = make_election()
    first, second = make_voters(2)
    cast_vote(election.id, alice.id, first)
    cast_vote(election.id, bob.id, second)

    results = get_results(election.id)

    assert results["isTie"] is True
    assert set(results["winners"]) == {alice.id, bob.id}


def test_results_for_unknown_election_are_empty(db_session):
    results = get_results("missing")

    assert results["candidates"] == []
    assert results["totalVotes"] == 0
    assert results["winners"] == []
    assert results["status"] is None


def test_audit_finds_and_recount_repairs_drift(make_election, make_voters):
    election, (alice, bob) = make_election()
    voters = make_voters(2)
    cast_vote(election.id, alice.id, voters[0])
    cast_vote(election.id, alice.id, voters[1])

    Candidate.query.filter_by(id=alice.id).update({Candidate.vote_count: 7})
    Candidate.query.filter_by(id=bob.id).update({Candidate.vote_count: 1})
    db.session.commit()

    drift = audit_tally(election.id)
    assert {(row["name"], row["stored"], row["actual"]) for row in drift} == {
        ("Alice", 7, 2),
        ("Bob", 1, 0),
    }

    repaired = recount_tally(election.id)
    assert len(repaired) == 2
    assert audit_tally(election.id) == []
    assert get_results(election.id)["totalVotes"] == 2
