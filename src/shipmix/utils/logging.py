"""Coloured console logging and step progress for batch runs."""
import logging
from tqdm import tqdm

class Colors:
    """ANSI color codes for prettier output."""
    CYAN = '\033[36m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    RED = '\033[31m'
    MAGENTA = '\033[35m'
    BLUE = '\033[34m'
    GRAY = '\033[37m'
    BOLD = '\033[1m'
    RESET = '\033[0m'

class Symbols:
    """Unicode symbols for status indicators."""
    CHECK = '✓'
    CROSS = '✗'
    ROCKET = '\U0001F680'
    GEAR = '⚙'
    PACKAGE = '\U0001F4E6'
    TRUCK = '\U0001F69A'
    CHART = '\U0001F4CA'

LEVEL_COLORS = {
    'DEBUG': Colors.GRAY,
    'INFO': Colors.CYAN,
    'WARNING': Colors.YELLOW,
    'ERROR': Colors.RED,
    'CRITICAL': Colors.RED + Colors.BOLD
}

class SimpleFormatter(logging.Formatter):
    """Message-only formatter, coloured by level."""
    def format(self, record):
        color = LEVEL_COLORS.get(record.levelname, Colors.RESET)
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{color}{message}{Colors.RESET}"

def setup_logging(level: int = logging.INFO) -> None:
    """Route root logging to a single coloured console handler."""
    logger = logging.getLogger()
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console = logging.StreamHandler()
    console.setFormatter(SimpleFormatter())
    logger.addHandler(console)

class ProgressTracker:
    """Step progress bar for the assignment CLI."""
    def __init__(self, steps):
        self.steps = steps
        self.pbar = tqdm(
            total=len(steps),
            desc=f"{Colors.BLUE}{Symbols.TRUCK} Assignment Progress{Colors.RESET}",
            bar_format="{desc}: {percentage:3.0f}%|{bar}| {n_fmt}/{total_fmt}"
        )
        self.current = 0

        self.status_formats = {
            'success': f"{Colors.GREEN}{Symbols.CHECK}",
            'warning': f"{Colors.YELLOW}{Symbols.GEAR}",
            'error': f"{Colors.RED}{Symbols.CROSS}",
            'info': f"{Colors.CYAN}{Symbols.PACKAGE}",
        }

    @property
    def current_step(self):
        """Name of the step being worked on, None once all are done."""
        if self.current < len(self.steps):
            return self.steps[self.current]
        return None

    def advance(self, message=None, status='success'):
        """Advance progress bar and optionally log a message."""
        if message:
            prefix = self.status_formats.get(status, '')
            self.pbar.write(f"{prefix} {message}{Colors.RESET}")
        self.current += 1
        self.pbar.update(1)

    def close(self):
        """Clean up progress bar."""
        self.pbar.write(f"\n{Colors.GREEN}{Symbols.ROCKET} Assignment completed!{Colors.RESET}\n")
        self.pbar.close()
