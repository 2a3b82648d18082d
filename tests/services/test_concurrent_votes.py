import threading

from voteaholic.errors import VotingError
from voteaholic.extensions import db
from voteaholic.models import Candidate, Vote
from voteaholic.services.voting import audit_tally, cast_vote


def race(app, attempts):
    """Run every (election, candidate, voter) attempt at once, one thread each."""
    barrier = threading.Barrier(len(attempts))
    outcomes = []
    lock = threading.Lock()

    def worker(election_id, candidate_id, voter_id):
        with app.app_context():
            barrier.wait()
            try:
                vote = cast_vote(election_id, candidate_id, voter_id)
                outcome = ("ok", vote.id)
            except VotingError as exc:
                outcome = ("error", exc.code)
        with lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=worker, args=attempt) for attempt in attempts]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)
    return outcomes


def test_same_voter_racing_gets_exactly_one_vote(app, make_election, voter_user):
    election, (alice, bob) = make_election()
    election_id, voter_id = election.id, voter_user.id
    candidate_ids = [alice.id, bob.id]
    db.session.commit()

    attempts = [(election_id, candidate_ids[i % 2], voter_id) for i in range(12)]
    outcomes = race(app, attempts)

    assert len(outcomes) == 12
    assert [kind for kind, _ in outcomes].count("ok") == 1
    assert sorted(detail for kind, detail in outcomes if kind == "error") == ["duplicate_vote"] * 11

    assert Vote.query.filter_by(election_id=election_id, voter_id=voter_id).count() == 1
    total = db.session.query(db.func.sum(Candidate.vote_count)).filter_by(
        election_id=election_id
    ).scalar()
    assert total == 1
    assert audit_tally(election_id) == []


def test_concurrent_increments_are_not_lost(app, make_election, make_voters):
    election, (alice, _) = make_election()
    election_id, alice_id = election.id, alice.id
    voter_ids = make_voters(12)

    outcomes = race(app, [(election_id, alice_id, voter_id) for voter_id in voter_ids])

    assert all(kind == "ok" for kind, _ in outcomes)
    assert db.session.query(Candidate.vote_count).filter_by(id=alice_id).scalar() == 12
    assert Vote.query.filter_by(candidate_id=alice_id).count() == 12


def test_mixed_race_keeps_counts_equal_to_ledger(app, make_election, make_voters):
    election, (alice, bob) = make_election()
    election_id = election.id
    candidate_ids = [alice.id, bob.id]
    voter_ids = make_voters(6)

    attempts = []
    for voter_id in voter_ids:
        attempts.append((election_id, candidate_ids[0], voter_id))
        attempts.append((election_id, candidate_ids[1], voter_id))

    outcomes = race(app, attempts)

    assert [kind for kind, _ in outcomes].count("ok") == 6
    assert Vote.query.filter_by(election_id=election_id).count() == 6
    for candidate_id in candidate_ids:
        stored = db.session.query(Candidate.vote_count).filter_by(id=candidate_id).scalar()
        assert stored == Vote.query.filter_by(candidate_id=candidate_id).count()
    assert audit_tally(election_id) == []
