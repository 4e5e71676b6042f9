"""confluence-search: print the results of a CQL search."""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import click

from confluence_rest.client import ConfluenceClient
from confluence_rest.exceptions import ConfluenceError


@click.command()
@click.argument("cql")
@click.option("--expand", default=None, help="Comma-separated properties to expand, e.g. metadata.labels")
@click.option("--raw", is_flag=True, help="Print each result as JSON instead of id and title.")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Stop after this many results.")
@click.option("-v", "--verbose", is_flag=True, help="Log requests to stderr.")
def main(cql: str, expand: Optional[str], raw: bool, limit: Optional[int], verbose: bool) -> None:
    """Run a CQL search against the server configured in CONFLUENCE_*."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    query = {"cql": cql}
    if expand:
        query["expand"] = expand

    try:
        with ConfluenceClient() as confluence:
            for count, result in enumerate(confluence.search(query), start=1):
                if raw:
                    click.echo(json.dumps(result, sort_keys=True))
                else:
                    click.echo(f"{result.get('id', '')}\t{result.get('title', '')}")
                if limit is not None and count >= limit:
                    break
    except ConfluenceError as e:
        click.echo(str(e).rstrip("\n"), err=True)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
