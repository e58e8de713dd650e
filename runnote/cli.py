import argparse
import json
import sys


def _load_settings(args, required: bool = False):
    from runnote.config import classification_settings, load_config

    try:
        config = load_config(args.config)
    except FileNotFoundError:
        if required:
            raise
        config = {}
    return config, classification_settings(config)


def _make_classifier(args, settings):
    from runnote.analysis.classifier import get_classifier

    try:
        return get_classifier(args.classifier, settings=settings, verbose=args.verbose)
    except KeyError as e:
        print(e.args[0])
        sys.exit(1)


def _print_result(activity, result, update, as_json: bool = False):
    if as_json:
        payload = result.to_dict()
        payload["title"] = update.name
        payload["summary"] = update.description.split("\n")[0]
        print(json.dumps(payload, indent=2))
        return

    label = f"Activity #{activity.id}" if activity.id is not None else "Activity"
    if activity.name:
        label += f" \"{activity.name}\""
    print(f"\n{label}:")
    print(f"  Type:     {result.type.title} [{result.type.code}]")
    print(f"  Title:    {update.name}")
    print(f"  Summary:  {update.description.splitlines()[0]}")
    if result.fallback_reason:
        print(f"  Note:     {result.fallback_reason}")


def cmd_classify(args):
    from runnote.errors import InvalidInputError
    from runnote.ingest.strava import load_activity_file
    from runnote.summary import build_activity_update

    _, settings = _load_settings(args)

    try:
        activity = load_activity_file(args.file)
    except (OSError, json.JSONDecodeError, InvalidInputError) as e:
        print(f"Could not read {args.file}: {e}")
        sys.exit(1)

    classifier = _make_classifier(args, settings)
    try:
        result = classifier.analyze(activity)
    except (ValueError, ZeroDivisionError) as e:
        print(f"Analysis failed: {e}")
        sys.exit(1)

    update = build_activity_update(activity, result)
    _print_result(activity, result, update, as_json=args.json)


def cmd_sync(args):
    from runnote.ingest.strava import fetch_activity, get_client, push_update
    from runnote.summary import build_activity_update

    try:
        config, settings = _load_settings(args, required=True)
        client = get_client(config)
    except FileNotFoundError as e:
        print(str(e))
        sys.exit(1)

    if args.verbose:
        print(f"  Fetching activity {args.activity} from Strava...")
    activity = fetch_activity(client, args.activity)

    classifier = _make_classifier(args, settings)
    try:
        result = classifier.analyze(activity)
    except (ValueError, ZeroDivisionError) as e:
        print(f"Analysis failed for activity {args.activity}: {e}")
        sys.exit(1)

    update = build_activity_update(activity, result)
    _print_result(activity, result, update)

    if args.dry_run:
        print("\n[DRY RUN] Activity not updated.")
        return

    push_update(client, args.activity, update)
    print(f"\nActivity {args.activity} updated.")


def main(argv=None):
    parser = argparse.ArgumentParser(prog="runnote", description="RunNote: workout classification and Strava summaries")
    parser.add_argument("--config", type=str, help="Path to config.yaml (default: config/config.yaml)")
    subparsers = parser.add_subparsers(dest="command")

    classify_parser = subparsers.add_parser("classify", help="Classify a saved activity JSON file")
    classify_parser.add_argument("file", help="Strava activity JSON (with laps)")
    classify_parser.add_argument("--classifier", default="rules", help="Classifier to use (default: rules)")
    classify_parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    classify_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    classify_parser.set_defaults(func=cmd_classify)

    sync_parser = subparsers.add_parser("sync", help="Classify a Strava activity and update its title/description")
    sync_parser.add_argument("--activity", type=int, required=True, metavar="ID", help="Strava activity ID")
    sync_parser.add_argument("--classifier", default="rules", help="Classifier to use (default: rules)")
    sync_parser.add_argument("--dry-run", action="store_true", help="Show the update without writing it")
    sync_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    sync_parser.set_defaults(func=cmd_sync)

    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
