"""Utility functions and helpers for the OCD production extractor."""

import logging
import sys

import psutil


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Set up logging configuration.

    Log records go to stderr; stdout is reserved for the production table.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured logger instance
    """
    # Configure logging format
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    # Configure root logger
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    return logging.getLogger("ocd_production")


def format_bytes(bytes_count: int) -> str:
    """Format bytes into human-readable string.

    Args:
        bytes_count: Number of bytes

    Returns:
        Formatted string (e.g., "1.5 GB")
    """
    if bytes_count == 0:
        return "0 B"

    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if bytes_count < 1024.0:
            return f"{bytes_count:.1f} {unit}"
        bytes_count /= 1024.0
    return f"{bytes_count:.1f} PB"


def get_memory_info() -> dict:
    """Get current memory usage information.

    Returns:
        Dictionary with memory statistics
    """
    # Virtual memory (system)
    vm = psutil.virtual_memory()

    # Current process memory
    process = psutil.Process()
    pm = process.memory_info()

    return {
        'system_total': vm.total,
        'system_used': vm.used,
        'system_percent': vm.percent,
        'process_rss': pm.rss,
    }


def log_memory_usage(logger: logging.Logger, context: str = "") -> None:
    """Log current memory usage at DEBUG level.

    Args:
        logger: Logger instance to use
        context: Optional context string for the log message
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    try:
        mem_info = get_memory_info()
    except psutil.Error as e:
        logger.debug(f"Failed to read memory usage: {e}")
        return

    context_str = f" ({context})" if context else ""
    logger.debug(
        f"Memory usage{context_str}: "
        f"Process: {format_bytes(mem_info['process_rss'])}, "
        f"System: {mem_info['system_percent']:.1f}% "
        f"({format_bytes(mem_info['system_used'])}/{format_bytes(mem_info['system_total'])})"
    )
