"""学生選挙 CLI コマンドグループ."""

import click

from src.interfaces.cli.commands.election.ballot import register, vote
from src.interfaces.cli.commands.election.phase import (
    end_registration,
    end_voting,
    reset,
    start_registration,
    start_voting,
    status,
)
from src.interfaces.cli.commands.election.results import results
from src.interfaces.cli.commands.election.roster import (
    add_candidate,
    add_position,
    delete_candidate,
    delete_position,
    roster,
    update_candidate,
)


@click.group()
def election():
    """学生選挙の管理コマンド."""
    pass


election.add_command(status)
election.add_command(start_registration)
election.add_command(end_registration)
election.add_command(start_voting)
election.add_command(end_voting)
election.add_command(reset)
election.add_command(register)
election.add_command(vote)
election.add_command(results)
election.add_command(roster)
election.add_command(add_position)
election.add_command(delete_position)
election.add_command(add_candidate)
election.add_command(update_candidate)
election.add_command(delete_candidate)
