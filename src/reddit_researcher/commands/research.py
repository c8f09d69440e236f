"""Research commands for reddit-researcher.

Read-only access to Reddit via public .json endpoints.
No authentication or API keys required. Each command prints exactly one
JSON envelope to stdout and exits 0 when it is ok, 1 otherwise.
"""

from typing import Any, Callable, Dict, Optional

import click

from ..researcher import RedditResearcher
from ..utils.config import load_config
from ..utils.output import error_envelope, handle_output

SORT_CHOICES = ["relevance", "hot", "top", "new"]
TIME_CHOICES = ["hour", "day", "week", "month", "year", "all"]

# Missing flags are reported in the envelope, unknown ones are ignored
COMMAND_SETTINGS = {
    "help_option_names": ["--help", "-h"],
    "ignore_unknown_options": True,
    "allow_extra_args": True,
}


def _run(handler: Callable[[RedditResearcher], Dict[str, Any]], output: Optional[str]):
    """Build a researcher, run one handler and exit with the envelope's status."""
    try:
        envelope = handler(RedditResearcher.from_config(load_config()))
    except Exception as exc:
        envelope = error_envelope(str(exc))

    click.get_current_context().exit(handle_output(envelope, output))


def filter_options(func):
    """--sort / --time shared by the search-style commands."""
    func = click.option(
        "--time",
        "time_filter",
        type=click.Choice(TIME_CHOICES),
        default=None,
        help="Time range (default: year)",
    )(func)
    func = click.option(
        "--sort",
        type=click.Choice(SORT_CHOICES),
        default=None,
        help="Sort order (default: relevance)",
    )(func)
    return func


def output_option(func):
    return click.option("--output", "-o", default=None, help="Save JSON output to file")(func)


@click.command(name="search", context_settings=COMMAND_SETTINGS)
@click.option("--subreddit", default=None, help="Subreddit name")
@click.option("--query", default=None, help="Search query")
@filter_options
@click.option("--limit", type=int, default=None, help="Max results (default: 25)")
@output_option
def search(
    subreddit: Optional[str],
    query: Optional[str],
    sort: Optional[str],
    time_filter: Optional[str],
    limit: Optional[int],
    output: Optional[str],
):
    """Search a single subreddit.

    \b
    Examples:
        reddit-researcher search --subreddit shopify --query "inventory app"
        reddit-researcher search --subreddit ecommerce --query reviews --sort top --time month
    """
    _run(
        lambda r: r.search(
            subreddit=subreddit, query=query, sort=sort, time=time_filter, limit=limit
        ),
        output,
    )


@click.command(name="comments", context_settings=COMMAND_SETTINGS)
@click.option("--url", default=None, help="Reddit post URL")
@click.option("--limit", type=int, default=None, help="Max comments (default: 50)")
@click.option("--depth", type=int, default=None, help="Comment nesting depth (default: 2)")
@output_option
def comments(
    url: Optional[str],
    limit: Optional[int],
    depth: Optional[int],
    output: Optional[str],
):
    """Fetch comment thread from a post URL.

    \b
    Examples:
        reddit-researcher comments --url https://www.reddit.com/r/shopify/comments/abc123/title/
    """
    _run(lambda r: r.comments(url=url, limit=limit, depth=depth), output)


@click.command(name="search-all", context_settings=COMMAND_SETTINGS)
@click.option("--query", default=None, help="Search query")
@filter_options
@click.option("--limit", type=int, default=None, help="Max results per subreddit (default: 10)")
@output_option
def search_all(
    query: Optional[str],
    sort: Optional[str],
    time_filter: Optional[str],
    limit: Optional[int],
    output: Optional[str],
):
    """Search all target subreddits."""
    _run(
        lambda r: r.search_all(query=query, sort=sort, time=time_filter, limit=limit),
        output,
    )


@click.command(name="apps", context_settings=COMMAND_SETTINGS)
@click.option("--category", default=None, help="App category")
@filter_options
@click.option("--limit", type=int, default=None, help="Max results per search (default: 15)")
@output_option
def apps(
    category: Optional[str],
    sort: Optional[str],
    time_filter: Optional[str],
    limit: Optional[int],
    output: Optional[str],
):
    """Search for app recommendations in a category."""
    _run(
        lambda r: r.apps(category=category, sort=sort, time=time_filter, limit=limit),
        output,
    )
