"""
CLI entrypoint for the taxonomy facet.

This script performs the following steps:
- loads .env, configs/facet.yaml
- configures logging (console + optional rotating file)
- creates the taxonomy provider adapter and analytics sink
- runs the bootstrap expansion for the active filters
- applies simulated user clicks (--toggle) through the facet adapter
- logs a plain-text outline of the visible tree
"""

import argparse
import asyncio
import logging
import uuid
from datetime import datetime
from pathlib import Path

import opik
from dotenv import load_dotenv

from application import ExpansionEngine, FacetAdapter, log_tree_summary
from domain.taxonomy import UnknownNodeError
from infrastructure.analytics import make_analytics_sink
from infrastructure.config import AnalyticsSinkKind, FacetConfig, load_facet_config
from infrastructure.constants import FACET_CONFIG_FILE
from infrastructure.io import ensure_exists
from infrastructure.observability import configure_logging, make_session_tag, set_log_context
from infrastructure.providers import ProviderError, make_provider

logger = logging.getLogger(__name__)


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Expand a taxonomy facet tree for a set of active filters")
    p.add_argument(
        "--config",
        type=str,
        default=str(FACET_CONFIG_FILE),
        help="Path to facet.yaml (default: configs/facet.yaml)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=".env",
        help="Path to .env file (default: .env; skipped if missing)",
    )
    p.add_argument(
        "--mock",
        action="store_true",
        help="Use the static sample taxonomy instead of calling the configured provider.",
    )
    p.add_argument(
        "--filter",
        dest="filters",
        action="append",
        default=[],
        metavar="PATH",
        help="Active filter path, e.g. '|A|B' (repeatable; appended to active_filters from config)",
    )
    p.add_argument(
        "--toggle",
        dest="toggles",
        action="append",
        default=[],
        metavar="NODE_ID",
        help="Simulate a user click on a node after bootstrap (repeatable, applied in order)",
    )
    p.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional rotating log file",
    )
    p.add_argument(
        "--console-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level",
    )
    p.add_argument(
        "--file-level",
        type=str,
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="File log level",
    )
    return p.parse_args()


async def run_session(cfg: FacetConfig, *, use_mock: bool, toggles: list[str]) -> int:
    """Bootstrap the facet, apply toggles, log the outline. Returns a process exit code."""
    provider = make_provider(cfg, use_mock=use_mock)
    analytics = make_analytics_sink(cfg.analytics)
    engine = ExpansionEngine.from_cfg(cfg, provider)
    facet = FacetAdapter(engine, analytics)

    exit_code = 0
    try:
        report = await engine.bootstrap(cfg.active_filters)
        if report.error:
            exit_code = 1

        for node_id in toggles:
            try:
                view = await facet.expand(node_id)
            except UnknownNodeError as e:
                logger.error("Cannot toggle %s: %s", node_id, e)
                exit_code = 1
                continue
            except ProviderError as e:
                logger.error("Toggle of %s failed: %s", node_id, e)
                exit_code = 1
                continue
            logger.info("Toggled %s -> %s", node_id, view.state.value)

        log_tree_summary(engine, report)
    finally:
        analytics.flush()
        await provider.aclose()

    return exit_code


def main() -> int:
    args = _parse_args()

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=True)

    config_path = Path(args.config)
    ensure_exists(config_path, "facet.yaml")

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(
        log_file=log_file,
        console_level=getattr(logging, args.console_level),
        file_level=getattr(logging, args.file_level),
    )

    cfg = load_facet_config(config_path, extra_filters=args.filters)

    session_id = f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:6]}"
    set_log_context(
        session_id=session_id,
        provider="static (mock)" if args.mock else cfg.provider.value,
    )
    logger.info("Starting session: %s (session_tag=%s)", session_id, make_session_tag(session_id))
    logger.info("Active filters: %s", cfg.active_filters or "none")

    if cfg.analytics.sink is AnalyticsSinkKind.OPIK:
        opik.configure()

    return asyncio.run(run_session(cfg, use_mock=bool(args.mock), toggles=list(args.toggles)))


if __name__ == "__main__":
    raise SystemExit(main())
