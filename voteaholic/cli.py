import click
from flask.cli import AppGroup, with_appcontext

from voteaholic.errors import VotingError
from voteaholic.services import users as user_service
from voteaholic.services.voting import audit_tally, clear_votes, recount_tally, voting_stats

votes_cli = AppGroup("votes", help="Inspect and reset the vote ledger.")


@click.command("create-admin")
@with_appcontext
@click.option("--username", prompt=True)
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
def create_admin_command(username, email, password):
    """Create an administrator account."""
    try:
        user = user_service.create_admin(username, email, password)
    except VotingError as exc:
        raise click.ClickException(exc.message) from exc
    click.echo(f"Admin user {user.username} created ({user.id}).")


@votes_cli.command("clear")
@click.option("--election", "election_id", default=None, help="Only clear this election.")
@click.confirmation_option(prompt="This permanently deletes votes. Continue?")
def clear_command(election_id):
    """Delete votes and reset counts and voter statuses."""
    removed = clear_votes(election_id)
    scope = f"election {election_id}" if election_id else "all elections"
    click.echo(f"Removed {removed} votes from {scope}.")


@votes_cli.command("audit")
@click.option("--election", "election_id", default=None, help="Only audit this election.")
@click.option("--repair", is_flag=True, help="Rewrite stored counts from the ledger.")
def audit_command(election_id, repair):
    """Compare candidate vote counts against the ledger."""
    drift = recount_tally(election_id) if repair else audit_tally(election_id)
    if not drift:
        click.echo("Tallies match the ledger.")
        return

    for row in drift:
        click.echo(
            f"{row['electionId']} {row['name']}: stored {row['stored']}, ledger {row['actual']}"
        )
    if repair:
        click.echo(f"Repaired {len(drift)} candidate counts.")
    else:
        raise click.ClickException(f"{len(drift)} candidate counts disagree with the ledger.")


@votes_cli.command("stats")
def stats_command():
    """Print voting statistics."""
    stats = voting_stats()
    click.echo(f"Users: {stats['users']}")
    click.echo(f"Elections: {stats['elections']}")
    for status, count in sorted(stats["electionsByStatus"].items()):
        click.echo(f"  {status}: {count}")
    click.echo(f"Candidates: {stats['candidates']}")
    click.echo(f"Votes: {stats['votes']}")


def register_cli(app):
    app.cli.add_command(create_admin_command)
    app.cli.add_command(votes_cli)
