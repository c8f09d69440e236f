#!/usr/bin/env python3
"""
reddit-researcher - Reddit market research CLI
Queries Reddit's public JSON endpoints and prints JSON envelopes
"""

import click

from . import __version__
from .commands.research import search, comments, search_all, apps
from .utils.config import TARGET_SUBREDDITS
from .utils.output import console, error_envelope, handle_output

USAGE = f"""Reddit Market Research CLI

Usage:
  reddit-researcher <command> [options]

Commands:
  search      Search a single subreddit
  comments    Fetch comment thread from a post URL
  search-all  Search all target subreddits
  apps        Search for app recommendations in a category

Options:
  --subreddit <name>   Subreddit name (search command)
  --query <text>       Search query (search, search-all commands)
  --url <url>          Reddit post URL (comments command)
  --category <text>    App category (apps command)
  --sort <type>        Sort order: relevance, hot, top, new (default: relevance)
  --time <range>       Time range: hour, day, week, month, year, all (default: year)
  --limit <n>          Max results per subreddit (default varies by command)
  --depth <n>          Comment nesting depth (comments command, default: 2)
  --output <path>      Save JSON output to file

Target subreddits (search-all):
  {", ".join(TARGET_SUBREDDITS)}"""


def print_usage():
    """Usage goes to stderr so stdout only ever carries JSON"""
    console.print(USAGE, markup=False, highlight=False, soft_wrap=True)


def _help_callback(ctx, param, value):
    if not value or ctx.resilient_parsing:
        return
    print_usage()
    ctx.exit(0)


class ResearchGroup(click.Group):
    """Command group that never exits outside the JSON envelope contract.

    Unknown commands print usage and exit 1; bad flag values on a known
    command become an error envelope and exit 1.
    """

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except click.UsageError as exc:
            ctx.exit(handle_output(error_envelope(exc.format_message())))

    def resolve_command(self, ctx, args):
        cmd_name = args[0] if args else None
        if cmd_name and self.get_command(ctx, cmd_name) is None:
            console.print(f"Unknown command: {cmd_name}", markup=False, highlight=False)
            print_usage()
            ctx.exit(1)
        return super().resolve_command(ctx, args)


@click.group(
    cls=ResearchGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": []},
)
@click.option(
    "--help",
    "-h",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_help_callback,
    help="Show usage and exit",
)
@click.version_option(version=__version__, prog_name="reddit-researcher")
@click.pass_context
def cli(ctx):
    """
    reddit-researcher - Reddit Market Research CLI

    \b
    Examples:
        reddit-researcher search --subreddit shopify --query "inventory app"
        reddit-researcher comments --url https://reddit.com/r/shopify/comments/abc123/title/
        reddit-researcher search-all --query "email marketing"
        reddit-researcher apps --category reviews
    """
    if ctx.invoked_subcommand is None:
        print_usage()
        ctx.exit(1)


# Register commands
cli.add_command(search)
cli.add_command(comments)
cli.add_command(search_all, name='search-all')
cli.add_command(apps)


@cli.command(name="help", context_settings={"help_option_names": ["--help", "-h"]})
@click.pass_context
def help_command(ctx):
    """Show usage"""
    print_usage()
    ctx.exit(0)


if __name__ == '__main__':
    cli()
