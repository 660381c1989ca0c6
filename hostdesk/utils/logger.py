"""
Logging utility for the hostdesk backend.
"""
import logging
import sys
from typing import Optional
from colorama import Fore, Style, init
import structlog

from .models import FetchStats

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class ColorizedFormatter(logging.Formatter):
    """Custom formatter with colorized output."""

    COLORS = {
        'DEBUG': Fore.CYAN,
        'INFO': Fore.GREEN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.MAGENTA + Style.BRIGHT,
    }

    def format(self, record):
        # Add color to the level name
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{Style.RESET_ALL}"

        # Add color to the message for errors and warnings
        if record.levelno >= logging.WARNING:
            record.msg = f"{Fore.RED}{record.msg}{Style.RESET_ALL}"
        elif record.levelno == logging.INFO:
            record.msg = f"{Fore.GREEN}{record.msg}{Style.RESET_ALL}"

        return super().format(record)


def setup_logger(
    name: str = "hostdesk",
    level: str = "INFO",
    log_file: Optional[str] = None
) -> structlog.BoundLogger:
    """
    Set up structured logging with colorized console output.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging to file

    Returns:
        Configured structured logger
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if log_file else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(name)

    stdlib_logger = logging.getLogger(name)
    stdlib_logger.setLevel(getattr(logging, level.upper()))

    # Handlers are attached once per logger name
    if stdlib_logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_formatter = ColorizedFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(console_formatter)
    stdlib_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        stdlib_logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "hostdesk") -> structlog.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name

    Returns:
        Configured structured logger
    """
    return structlog.get_logger(name)


class CalendarLogger:
    """Logger for calendar loads that tracks fetched and skipped records."""

    def __init__(self, logger: structlog.BoundLogger):
        self.logger = logger
        self.stats = FetchStats()

    def log_reservations_fetched(self, reservations):
        self.stats.reservations_fetched += len(reservations)
        for reservation in reservations:
            self.stats.add_channel_count(reservation.channel.value)
        self.logger.info("Reservations fetched", count=len(reservations))

    def log_tasks_fetched(self, tasks):
        self.stats.tasks_fetched += len(tasks)
        self.logger.info("Housekeeping tasks fetched", count=len(tasks))

    def log_malformed_record(self, record, context: str = ""):
        """Log a record that could not be mapped."""
        self.stats.malformed_records += 1
        self.logger.warning("Malformed record skipped", record=record, context=context)

    def log_invalid_dates(self, record_id: str, kind: str = "reservation"):
        self.stats.invalid_dates += 1
        self.logger.warning("Unparseable date, record excluded", record_id=record_id, kind=kind)

    def log_degenerate_stay(self, reservation_id: str, nights: int):
        self.stats.degenerate_stays += 1
        self.logger.debug("Zero or negative night stay excluded", reservation_id=reservation_id, nights=nights)

    def log_grid_miss(self, reservation_id: str, day):
        """Log a clipped date missing from the month days."""
        self.stats.grid_misses += 1
        self.logger.warning("Clipped date not found in month grid", reservation_id=reservation_id, day=str(day))

    def log_error(self, error: Exception, context: str = ""):
        self.logger.error(
            "Error occurred",
            error=str(error),
            error_type=type(error).__name__,
            context=context
        )

    def print_summary(self):
        """Print a summary of the last load."""
        self.logger.info(
            "Calendar load summary",
            reservations_fetched=self.stats.reservations_fetched,
            tasks_fetched=self.stats.tasks_fetched,
            malformed_records=self.stats.malformed_records,
            invalid_dates=self.stats.invalid_dates,
            degenerate_stays=self.stats.degenerate_stays,
            grid_misses=self.stats.grid_misses,
            by_channel=self.stats.by_channel
        )

        print(f"\n{Fore.CYAN}{'='*50}")
        print(f"{Fore.WHITE}CALENDAR SUMMARY")
        print(f"{Fore.CYAN}{'='*50}")
        print(f"{Fore.GREEN}✓ Reservations fetched: {self.stats.reservations_fetched}")
        print(f"{Fore.GREEN}✓ Housekeeping tasks: {self.stats.tasks_fetched}")
        print(f"{Fore.YELLOW}⚠ Invalid dates: {self.stats.invalid_dates}")
        print(f"{Fore.YELLOW}⚠ Zero-night stays: {self.stats.degenerate_stays}")
        print(f"{Fore.RED}✗ Malformed records: {self.stats.malformed_records}")
        print(f"{Fore.RED}✗ Grid misses: {self.stats.grid_misses}")

        if self.stats.by_channel:
            print(f"\n{Fore.WHITE}By Channel:")
            for channel, count in self.stats.by_channel.items():
                print(f"  {Fore.CYAN}{channel}: {count}")

        print(f"{Fore.CYAN}{'='*50}\n")

    def reset_stats(self):
        self.stats.reset()
