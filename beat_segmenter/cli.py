"""CLI interface with subcommand routing."""

import argparse
import dataclasses
import json
import logging
import os
import sys

from beat_segmenter.constants import OUTPUT_DIR, BEATS_ARTIFACT, VERSION
from beat_segmenter.config import DEFAULT_CONFIG, SegmenterConfig, load_roster, load_roster_file
from beat_segmenter.parser import read_story
from beat_segmenter.segmenter import segment_with_report, describe_beats
from beat_segmenter.artifacts import (
    build_beats_artifact,
    get_project_status,
    init_output_dir,
    list_projects,
    slug_from_path,
    write_artifact,
)


def _read_story_or_exit(file_path: str) -> tuple[str, str, str]:
    if not os.path.exists(file_path):
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        raise SystemExit(1)
    title, author, narrative = read_story(file_path)
    if not narrative.strip():
        print(f"Error: File is empty: {file_path}", file=sys.stderr)
        raise SystemExit(1)
    return title, author, narrative


def _config_from_args(args) -> SegmenterConfig:
    """Default config, extended by a roster file and threshold overrides."""
    if args.roster:
        if not os.path.exists(args.roster):
            print(f"Error: Roster file not found: {args.roster}", file=sys.stderr)
            raise SystemExit(1)
        config = load_roster_file(args.roster, DEFAULT_CONFIG)
    else:
        config = load_roster(args.file, DEFAULT_CONFIG)

    overrides = {}
    if args.min_length is not None:
        overrides["min_length"] = args.min_length
    if args.max_beats is not None:
        overrides["max_beats"] = args.max_beats
    try:
        return dataclasses.replace(config, **overrides)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)


def cmd_segment(args):
    """Print the beats of a story file."""
    title, author, narrative = _read_story_or_exit(args.file)
    config = _config_from_args(args)
    result = segment_with_report(narrative, config)
    beats = describe_beats(result.beats, config)

    if args.json:
        payload = build_beats_artifact(title, author, os.path.abspath(args.file), result, beats, config)
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    total = len(beats)
    for beat in beats:
        print(f"[{beat.index + 1}/{total}] {beat.text}")
    if result.truncated:
        print(f"Note: {result.dropped} beats beyond the {config.max_beats}-page cap were dropped.", file=sys.stderr)


def cmd_new(args):
    """Create a project with beats.json from a story file."""
    title, author, narrative = _read_story_or_exit(args.file)

    slug = slug_from_path(args.file)
    if os.path.exists(os.path.join(OUTPUT_DIR, slug, BEATS_ARTIFACT)) and not args.force:
        print(f"Error: Project '{slug}' already exists.", file=sys.stderr)
        print("Use --force to overwrite it.", file=sys.stderr)
        raise SystemExit(1)

    config = _config_from_args(args)
    result = segment_with_report(narrative, config)
    if not result.beats:
        print(f"Error: Could not segment any beats from: {args.file}", file=sys.stderr)
        raise SystemExit(1)
    beats = describe_beats(result.beats, config)

    project_dir = init_output_dir(args.file, output_base=OUTPUT_DIR)
    data = build_beats_artifact(title, author, os.path.abspath(args.file), result, beats, config)
    write_artifact(project_dir, BEATS_ARTIFACT, data)

    print(f"Created project: {slug}")
    print(f"Segmented {len(beats)} beats from '{title}'")
    if result.truncated:
        print(f"Dropped {result.dropped} beats beyond the {config.max_beats}-page cap")


def cmd_status(args):
    """Show project status."""
    project_dir = os.path.join(OUTPUT_DIR, args.slug)
    status = get_project_status(project_dir)
    if status["state"] != "done":
        print(f"Error: Project '{args.slug}' not found.", file=sys.stderr)
        print("Run 'beats new <file>' to create a project.", file=sys.stderr)
        raise SystemExit(1)

    print(f"Project: {args.slug}")
    print(f"Beats:   {status['beats']} ({status['dropped']} dropped)")
    print("Focus:")
    for focus, count in sorted(status["focus"].items()):
        print(f"  {focus:<18}{count}")


def cmd_list(args):
    """List all projects."""
    projects = list_projects(output_base=OUTPUT_DIR)
    if not projects:
        print("No projects found.")
        return
    print("Projects:")
    for name in projects:
        print(f"  {name}")


def _add_segment_options(parser):
    parser.add_argument("file", help="Path to the story text file")
    parser.add_argument("--min-length", type=int, help="Minimum beat length in characters")
    parser.add_argument("--max-beats", type=int, help="Maximum number of beats")
    parser.add_argument("--roster", help="Roster JSON file (default: <story>.roster.json)")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="beats",
        description="Beat Segmenter — split story prose into one-beat-per-page visual beats",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log splitting decisions")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # segment
    segment_parser = subparsers.add_parser("segment", help="Print the beats of a story file")
    _add_segment_options(segment_parser)
    segment_parser.add_argument("--json", action="store_true", help="Print beats.json-style output")
    segment_parser.set_defaults(func=cmd_segment)

    # new
    new_parser = subparsers.add_parser("new", help="Create a project from a story file")
    _add_segment_options(new_parser)
    new_parser.add_argument("--force", action="store_true", help="Overwrite an existing project")
    new_parser.set_defaults(func=cmd_new)

    # status
    status_parser = subparsers.add_parser("status", help="Show project status")
    status_parser.add_argument("slug", help="Project slug")
    status_parser.set_defaults(func=cmd_status)

    # list
    list_parser = subparsers.add_parser("list", help="List all projects")
    list_parser.set_defaults(func=cmd_list)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
