"""Command-line interface for the documentation link checker."""

import argparse
import sys
from typing import List, Optional

from doclinks.config import CrawlConfig, settings
from doclinks.engine import CrawlEngine
from doclinks.logging_config import setup_logging
from doclinks.report import ConsoleReporter, write_json_report

USAGE = """\
Usage: doclinks [--use-puppeteer] [--verbose|-v] <url>
   or: doclinks --url <url> [--use-puppeteer] [--verbose|-v]
Example: doclinks http://localhost:3000/"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doclinks",
        description="Crawl a documentation site and report broken links",
    )
    parser.add_argument("url", nargs="?", help="Start URL to crawl")
    parser.add_argument("--url", dest="url_option", metavar="URL", help="Start URL to crawl")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Report each broken link as soon as it is found",
    )
    parser.add_argument(
        "--use-puppeteer",
        "--render-js",
        dest="use_render",
        action="store_true",
        help="Render pages in a headless browser to find JavaScript-generated links",
    )
    parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--output-file",
        "-f",
        help="Write output to file (requires --output json)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging verbosity (default: WARNING, DEBUG when DEBUG=true)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to file in addition to console",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Process exit code: 0 for a completed crawl, 1 for usage or fatal errors
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    start_url = args.url_option or args.url
    if not start_url:
        print("Error: URL is required.", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    if args.output_file and args.output != "json":
        print("Error: --output-file requires --output json.", file=sys.stderr)
        return 1

    config = CrawlConfig.from_env(
        use_render=args.use_render,
        verbose=args.verbose,
    )

    log_level = args.log_level or ("DEBUG" if config.debug else settings.LOG_LEVEL)
    setup_logging(level=log_level, log_file=args.log_file or settings.LOG_FILE)

    json_output = args.output == "json"
    # Keep stdout clean for JSON unless it goes to a file
    progress_stream = sys.stderr if json_output and not args.output_file else sys.stdout

    engine = CrawlEngine(start_url, config=config)
    reporter = ConsoleReporter(
        start_url,
        verbose=config.verbose,
        debug=config.debug,
        stream=progress_stream,
    )
    reporter.attach(engine, summary=not json_output)
    reporter.print_header()

    try:
        report = engine.run()
    except KeyboardInterrupt:
        print("\nCrawl interrupted by user.", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"\nError during crawl: {e}", file=sys.stderr)
        return 1

    if json_output:
        write_json_report(report, output_file=args.output_file)

    return 0


if __name__ == "__main__":
    sys.exit(main())
