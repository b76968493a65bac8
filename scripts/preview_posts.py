"""Preview the posts index for a page URL from the command line.

Usage:
    python -m scripts.preview_posts posts.json
    python -m scripts.preview_posts posts.json --query "q=vector&p=2"
    python -m scripts.preview_posts https://example.com/posts.json --format html
"""

import argparse
import asyncio
import logging
import sys

from postindex.services.controller import ListController
from postindex.services.http_client import close_shared_client
from postindex.services.location import History
from postindex.services.markup import paint
from postindex.services.post_loader import load_posts_source

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def _print_text(controller: ListController) -> None:
    view = controller.view
    print(view.summary)
    for entry in view.entries:
        print(f"  {entry.date_display:<13} {entry.title}")
        if entry.chips:
            print(f"  {'':<13} {' '.join(c.label for c in entry.chips)}")
    if view.controls:
        strip = []
        for c in view.controls:
            if c.active:
                strip.append(f"[{c.label}]")
            elif c.disabled:
                strip.append(f"({c.label})")
            else:
                strip.append(c.label)
        print("\n" + " ".join(strip))
    print(f"\nURL: {controller.location}")


async def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("source", help="posts JSON file or http(s) URL")
    parser.add_argument("--query", default="", help="page query string, e.g. q=go&p=2")
    parser.add_argument("--format", choices=["text", "json", "html"], default="text")
    args = parser.parse_args()

    try:
        posts = await load_posts_source(args.source)
    finally:
        await close_shared_client()

    query = args.query.lstrip("?")
    controller = ListController(history=History(f"/?{query}" if query else "/"))
    controller.load(posts)
    controller.init_from_location()

    if args.format == "json":
        print(controller.view.model_dump_json(indent=2))
    elif args.format == "html":
        print(paint(controller.view))
    else:
        _print_text(controller)
    return 0 if len(posts) else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
