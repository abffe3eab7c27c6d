"""
Main entry point and CLI for the OLX True Price Enhancer.

Provides commands to run the rewriting proxy, patch a saved listing page
offline, and manage the persisted settings record.
"""

# Load environment variables from .env file before configuration is read
from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from olx_enhancer.config import (
    SETTING_KEYS,
    EnhancerSettings,
    SettingsStore,
    get_proxy_config,
)
from olx_enhancer.indicator import RecordingFilterIndicator
from olx_enhancer.interception import PrerenderedStateSlot
from olx_enhancer.models import PriceRange
from olx_enhancer.pipeline import EnhancerPipeline


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def load_settings(settings_path: Optional[str]) -> EnhancerSettings:
    """Load the settings snapshot for this run."""
    store = SettingsStore(settings_path or get_proxy_config().settings_path)
    return store.load()


def run_serve(args: argparse.Namespace) -> int:
    """
    Run the rewriting proxy.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    import uvicorn
    from olx_enhancer.proxy import create_app

    proxy_config = get_proxy_config()
    settings = load_settings(args.settings)

    app = create_app(settings=settings, proxy_config=proxy_config)
    host = args.host or proxy_config.host
    port = args.port or proxy_config.port

    print(f"\n🏠 OLX Enhancer proxy on http://{host}:{port} -> {proxy_config.upstream_base_url}\n")
    uvicorn.run(app, host=host, port=port, log_level="debug" if args.verbose else "info")
    return 0


def run_patch_state(args: argparse.Namespace) -> int:
    """
    Patch a saved listing page or initial-state JSON file.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    source = Path(args.file)
    if not source.exists():
        print(f"Error: File not found: {source}", file=sys.stderr)
        return 1

    if args.price_from is not None and args.price_to is not None and args.price_from > args.price_to:
        print(
            f"Error: Price from ({args.price_from}) cannot be greater than price to ({args.price_to})",
            file=sys.stderr
        )
        return 1

    settings = load_settings(args.settings)
    recorder = RecordingFilterIndicator()
    pipeline = EnhancerPipeline(settings, recorder)
    price_range = PriceRange(from_price=args.price_from, to_price=args.price_to)

    content = source.read_text(encoding="utf-8")
    if PrerenderedStateSlot(content).present:
        output = pipeline.state_patcher.patch_document(content, price_range)
    else:
        output = pipeline.state_patcher.patch(content, price_range).state

    if output == content:
        print("⚠️  Nothing patched (not a rent listing page, or no ads found)", file=sys.stderr)
    else:
        counts = recorder.last
        print(
            f"✅ Patched: {counts.by_price} hidden by price, {counts.by_agency} agency listing(s) hidden",
            file=sys.stderr
        )

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"   Written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output)
    return 0


def run_settings(args: argparse.Namespace) -> int:
    """
    Show or change the persisted settings record.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    store = SettingsStore(args.settings or get_proxy_config().settings_path)

    if args.action == "reset":
        settings = store.reset()
    elif args.action == "set":
        key = args.key.upper()
        if key not in SETTING_KEYS:
            print(f"Error: Unknown setting {args.key}. Known: {', '.join(SETTING_KEYS)}", file=sys.stderr)
            return 1
        settings = store.load().merged({key: args.value})
        store.save(settings)
        print("Saved. Restart the proxy to apply the change.")
    else:
        settings = store.load()

    print(json.dumps(settings.to_mapping(), indent=2, ensure_ascii=False))
    return 0


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="olx-enhancer",
        description="Show true total prices (price + rent) of OLX rent listings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the proxy and browse http://127.0.0.1:8080/d/nieruchomosci/mieszkania/wynajem/
  olx-enhancer serve

  # Patch a saved listing page, keeping totals between 2000 and 3000 zł
  olx-enhancer patch-state page.html --price-from 2000 --price-to 3000 -o patched.html

  # Hide agency listings from now on
  olx-enhancer settings set HIDE_AGENCIES true
        """
    )
    parser.add_argument("--settings", default=None, help="Path of the settings JSON file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the rewriting proxy")
    serve.add_argument("--host", default=None, help="Interface to bind (default from OLX_PROXY_HOST)")
    serve.add_argument("--port", type=int, default=None, help="Port to bind (default from OLX_PROXY_PORT)")

    patch = subparsers.add_parser("patch-state", help="Patch a saved listing page or state JSON")
    patch.add_argument("file", help="HTML page or initial-state JSON file")
    patch.add_argument("--output", "-o", default=None, help="Output file (default: stdout)")
    patch.add_argument("--price-from", type=int, default=None, help="Minimum true price (zł)")
    patch.add_argument("--price-to", type=int, default=None, help="Maximum true price (zł)")

    settings = subparsers.add_parser("settings", help="Show or change persisted settings")
    settings_actions = settings.add_subparsers(dest="action")
    settings_actions.add_parser("show", help="Show the current settings")
    settings_set = settings_actions.add_parser("set", help="Change one setting")
    settings_set.add_argument("key", help="Setting name, e.g. HIDE_AGENCIES")
    settings_set.add_argument("value", help="New value, e.g. true")
    settings_actions.add_parser("reset", help="Restore the defaults")

    return parser


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI application.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    commands = {
        "serve": run_serve,
        "patch-state": run_patch_state,
        "settings": run_settings,
    }

    try:
        return commands[args.command](args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Unexpected error in main: {str(e)}")
        print(f"❌ Unexpected error: {str(e)}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
