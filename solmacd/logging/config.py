"""
Centralized logging configuration for the SolMACD analysis core.

This module provides standardized logging configuration using structlog
for all components. Numeric modules log degenerate results at debug level;
the backtest engine logs simulated trade events through a bound logger.
"""
import logging
import sys
from typing import TYPE_CHECKING, Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

if TYPE_CHECKING:
    from ..models.indicators import MarketRegime
    from ..models.trading import Trade


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_backtest_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for backtest simulation events.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for simulated trades
    """
    return get_logger(name).bind(subsystem="backtest")


def get_analysis_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for request-level analysis events.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for the analysis engine
    """
    return get_logger(name).bind(subsystem="analysis")


def log_trade_event(
    logger: FilteringBoundLogger,
    action: str,
    trade: "Trade",
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a simulated trade opening or closing with standardized format.

    Args:
        logger: Structlog logger instance
        action: "open" or "close"
        trade: Trade being opened or closed
        reason: What caused the event (signal, stop_loss, take_profit, end_of_data)
        context: Additional context data
    """
    bound_logger = logger.bind(
        action=action,
        reason=reason,
        position=trade.position.value,
        entry_price=trade.entry_price,
        exit_price=trade.exit_price,
        size=trade.size,
        pnl=trade.pnl,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Trade event")


def log_regime_change(
    logger: FilteringBoundLogger,
    previous: "MarketRegime",
    current: "MarketRegime",
) -> None:
    """
    Log a market regime change.

    Args:
        logger: Structlog logger instance
        previous: Previously observed regime
        current: Newly detected regime
    """
    logger.info(
        "Regime change",
        from_regime=previous.regime.value,
        to_regime=current.regime.value,
        confidence=current.confidence,
    )
