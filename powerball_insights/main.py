"""Main application entry point for the Powerball analysis system."""

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional, TextIO

import structlog
import uvicorn

from .config.settings import settings
from .exceptions import PowerballError
from .predictions.predictor_engine import PredictorEngine
from .scraping.sources import DrawingSource, build_default_source, file_source
from .utils.helpers import format_prediction_output, frequency_frame, ranking_frame


TEXT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Applied to stdlib records and structlog events alike
SHARED_LOG_PROCESSORS = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
]


def build_log_handler(log_format: str, stream: Optional[TextIO] = None) -> logging.Handler:
    """Stream handler rendering plain text, or one JSON object per line for ``json``."""
    handler = logging.StreamHandler(stream)
    if log_format == "json":
        handler.setFormatter(structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=SHARED_LOG_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer()
            ]
        ))
    else:
        handler.setFormatter(logging.Formatter(TEXT_LOG_FORMAT))
    return handler


def setup_logging():
    """Setup logging configuration."""
    if settings.log_format == "json":
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                *SHARED_LOG_PROCESSORS,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        handlers=[build_log_handler(settings.log_format)],
        force=True
    )


def source_for_path(path: Optional[str], start: Optional[date] = None,
                    end: Optional[date] = None) -> DrawingSource:
    """CSV or text source for a local file, the live source otherwise."""
    if path is None:
        return build_default_source(settings, start=start, end=end)
    return file_source(path, start=start, end=end)


def run_server(args: argparse.Namespace):
    logger = logging.getLogger(__name__)
    host = args.host or settings.api_host
    port = args.port or settings.api_port
    logger.info(f"Starting API server on {host}:{port}")

    uvicorn.run(
        "powerball_insights.api.routes:app",
        host=host,
        port=port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
        access_log=True
    )


def run_predict(args: argparse.Namespace):
    engine = PredictorEngine(settings)
    source = source_for_path(args.file, start=args.start, end=args.end)
    run = engine.predict_from_source(source, count=args.count, seed=args.seed)
    snapshot = run.snapshot

    print(f"Analyzing {snapshot.total_drawings} drawings from {source.describe()}\n")
    print("Hot white balls:")
    print(ranking_frame(snapshot.hot_primary).to_string(index=False))
    print("\nCold white balls:")
    print(ranking_frame(snapshot.cold_primary).to_string(index=False))
    print("\nOverdue white balls:")
    print(ranking_frame(snapshot.overdue_numbers).to_string(index=False))
    print("\nCommon pairs:")
    print(ranking_frame(snapshot.common_pairs).to_string(index=False))

    if args.frequencies:
        print("\nWhite ball frequencies:")
        print(frequency_frame(snapshot.primary_frequency).to_string(index=False))

    stats = snapshot.sum_stats
    print(f"\nSum average {stats.average} (min {stats.minimum}, max {stats.maximum})")
    for label, count in snapshot.parity_distribution.items():
        print(f"  {label}: {count} drawings")

    output = format_prediction_output(run.predictions, seed=run.seed)
    if output['main']:
        main_pick = output['main']
        print(f"\nPrediction: {main_pick['numbers']} Powerball {main_pick['bonus_number']}")
    for i, pick in enumerate(output['runner_ups'], start=1):
        print(f"  Runner-up {i}: {pick['numbers']} Powerball {pick['bonus_number']}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="powerball-insights", description="Powerball analysis and predictions")
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    predict = subparsers.add_parser("predict", help="Analyze drawings and print predictions")
    predict.add_argument("--file", default=None, help="CSV export or saved results page; live fetch if omitted")
    predict.add_argument("--start", type=date.fromisoformat, default=None,
                         help="First drawing date to include (YYYY-MM-DD)")
    predict.add_argument("--end", type=date.fromisoformat, default=None,
                         help="Last drawing date to include (YYYY-MM-DD); defaults to today for live fetches")
    predict.add_argument("--count", type=int, default=None, help="Number of prediction sets")
    predict.add_argument("--seed", type=int, default=None, help="Seed for reproducible predictions")
    predict.add_argument("--frequencies", action="store_true", help="Also print the full frequency table")

    return parser


def main(argv: Optional[List[str]] = None):
    """Main application entry point."""
    setup_logging()
    logger = logging.getLogger(__name__)

    args = build_parser().parse_args(argv)
    command = args.command or "serve"
    if args.command is None:
        args.host, args.port = None, None

    try:
        if command == "serve":
            run_server(args)
        else:
            run_predict(args)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    except (PowerballError, ValueError) as e:
        logger.error(f"{command} failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
