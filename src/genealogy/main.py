"""Command line entry point: posts in, recommendations out.

    post-genealogy POST_FOLDER [OUTPUT_FILE] [options]

Without an output file the JSON goes to stdout; log messages always go to
stderr.
"""

import argparse
import logging
import os
import platform
import sys

from .config import Settings, load_settings, parse_weights
from .errors import GenealogyError
from .lib.genealogists import RandomGenealogistService, list_services, procure_genealogists
from .lib.genealogy import Genealogy
from .lib.posts import load_posts
from .lib.recommender import Recommender
from .lib.rendering import render_recommendations, write_recommendations
from .lib.weights import Weights

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def process_details() -> str:
    return f"Process ID: {os.getpid()} | Python version: {platform.python_version()}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="post-genealogy",
        description="Recommend related posts based on pluggable genealogists",
    )
    parser.add_argument("post_folder", nargs="?", help="Folder containing the posts")
    parser.add_argument("output_file", nargs="?", help="File to write the JSON to (default: stdout)")
    parser.add_argument("--per-post", type=int, help="Recommendations per post (default: 3)")
    parser.add_argument(
        "--genealogist",
        dest="genealogists",
        action="append",
        metavar="NAME",
        help=f"Genealogist to use, repeatable (available: {', '.join(list_services())})",
    )
    parser.add_argument(
        "--weight",
        dest="weights",
        action="append",
        metavar="NAME=VALUE",
        help="Weight of a relation type, repeatable",
    )
    parser.add_argument("--default-weight", type=float, help="Weight of relation types without explicit weight")
    parser.add_argument("--workers", type=int, help="Threads used to score pairs of posts")
    parser.add_argument("--timeout", type=float, help="Deadline for scoring all pairs, in seconds")
    parser.add_argument("--seed", dest="random_seed", type=int, help="Seed for the random genealogist")
    parser.add_argument("--log-level", help="Logging level (default: INFO)")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = vars(args).copy()
    if args.weights is not None:
        overrides["weights"] = parse_weights(",".join(args.weights))
    return load_settings(overrides)


def recommend(settings: Settings) -> str:
    """Run the whole pipeline and return the rendered recommendations."""
    posts = load_posts(settings.post_folder)
    overrides = {}
    if settings.random_seed is not None:
        seeded = RandomGenealogistService(seed=settings.random_seed)
        overrides[seeded.name] = seeded
    genealogists = procure_genealogists(posts, settings.genealogists, overrides)
    weights = Weights(settings.weights, settings.default_weight)

    genealogy = Genealogy(
        posts,
        genealogists,
        weights,
        max_workers=settings.workers,
        timeout=settings.timeout,
    )
    relations = genealogy.infer_relations()
    recommendations = Recommender().recommend(relations, settings.per_post)
    return render_recommendations(recommendations)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, stream=sys.stderr)

    try:
        settings = settings_from_args(args)
        logging.getLogger().setLevel(settings.log_level)
        logger.info(process_details())
        write_recommendations(recommend(settings), settings.output_file)
    except GenealogyError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
