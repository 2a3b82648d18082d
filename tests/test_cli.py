from voteaholic.extensions import db
from voteaholic.models import Candidate, User
from voteaholic.services.voting import cast_vote


def test_create_admin(app, db_session):
    runner = app.test_cli_runner()

    result = runner.invoke(
        args=[
            "create-admin",
            "--username", "root",
            "--email", "Root@Example.com",
            "--password", "pw-12345",
        ]
    )

    assert result.exit_code == 0
    assert "Admin user root created" in result.output
    assert User.query.filter_by(email="root@example.com").one().role == "admin"

    again = runner.invoke(
        args=[
            "create-admin",
            "--username", "root",
            "--email", "root@example.com",
            "--password", "pw-12345",
        ]
    )
    assert again.exit_code != 0


def test_audit_and_repair(app, make_election, voter_user):
    election, (alice, _) = make_election()
    cast_vote(election.id, alice.id, voter_user.id)
    runner = app.test_cli_runner()

    clean = runner.invoke(args=["votes", "audit"])
    assert clean.exit_code == 0
    assert "Tallies match the ledger." in clean.output

    Candidate.query.filter_by(id=alice.id).update({"vote_count": 5})
    db.session.commit()

    drifted = runner.invoke(args=["votes", "audit", "--election", election.id])
    assert drifted.exit_code == 1
    assert "stored 5, ledger 1" in drifted.output

    repaired = runner.invoke(args=["votes", "audit", "--repair"])
    assert repaired.exit_code == 0
    assert "Repaired 1 candidate counts." in repaired.output
    assert db.session.query(Candidate.vote_count).filter_by(id=alice.id).scalar() == 1


def test_clear_and_stats(app, make_election, make_voters):
    election, (alice, _) = make_election()
    for voter_id in make_voters(3):
        cast_vote(election.id, alice.id, voter_id)
    runner = app.test_cli_runner()

    stats = runner.invoke(args=["votes", "stats"])
    assert stats.exit_code == 0
    assert "Votes: 3" in stats.output
    assert "active: 1" in stats.output

    cleared = runner.invoke(args=["votes", "clear", "--yes"])
    assert cleared.exit_code == 0
    assert "Removed 3 votes from all elections." in cleared.output
