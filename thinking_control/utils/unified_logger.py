"""
Unified logging system for the thinking control pipeline
Provides consistent console output for decisions, injections and loop warnings
"""
import sys
import os
from datetime import datetime
from typing import Optional, Dict, Any, Callable
from enum import Enum


class LogLevel(Enum):
    """Log levels with priority values"""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogType(Enum):
    """Types of log messages for special handling"""
    GENERAL = "general"
    CLASSIFICATION = "classification"
    THINKING_DECISION = "thinking_decision"
    LOCALE_INJECTION = "locale_injection"
    LOOP_DETECTED = "loop_detected"


class Colors:
    """ANSI color codes for terminal output"""
    # Check if colors should be disabled
    NO_COLOR = os.environ.get('NO_COLOR') is not None or not sys.stdout.isatty()

    YELLOW = '' if NO_COLOR else '\033[93m'       # Headers, warnings
    WHITE = '' if NO_COLOR else '\033[97m'        # Main text
    GRAY = '' if NO_COLOR else '\033[90m'         # Technical details
    CYAN = '' if NO_COLOR else '\033[96m'         # Thinking decisions
    GREEN = '' if NO_COLOR else '\033[92m'        # Thinking enabled
    RED = '' if NO_COLOR else '\033[91m'          # Errors, loop warnings
    ENDC = '' if NO_COLOR else '\033[0m'          # Reset

    @classmethod
    def disable(cls):
        """Disable all colors"""
        cls.YELLOW = cls.WHITE = cls.GRAY = cls.CYAN = cls.GREEN = cls.RED = cls.ENDC = ''


class UnifiedLogger:
    """
    Unified logger that provides consistent logging across the pipeline
    """

    def __init__(self,
                 name: str = "thinking_control",
                 console_output: bool = True,
                 enable_colors: bool = True,
                 min_level: LogLevel = LogLevel.INFO,
                 storage_callback: Optional[Callable] = None):
        """
        Initialize the unified logger

        Args:
            name: Logger name/identifier
            console_output: Whether to output to console
            enable_colors: Whether to use colored output
            min_level: Minimum log level to display
            storage_callback: Callback receiving each structured entry (e.g., for a transport's own log)
        """
        self.name = name
        self.console_output = console_output
        self.enable_colors = enable_colors
        self.min_level = min_level
        self.storage_callback = storage_callback

        if not enable_colors:
            Colors.disable()

    def _format_timestamp(self) -> str:
        """Format current timestamp"""
        return datetime.now().strftime("%H:%M:%S")

    def _format_console_message(self, level: LogLevel, message: str,
                                log_type: LogType = LogType.GENERAL,
                                data: Optional[Dict[str, Any]] = None) -> str:
        """Format message for console output"""
        timestamp = self._format_timestamp()

        level_colors = {
            LogLevel.DEBUG: Colors.GRAY,
            LogLevel.INFO: Colors.WHITE,
            LogLevel.WARNING: Colors.YELLOW,
            LogLevel.ERROR: Colors.RED,
            LogLevel.CRITICAL: Colors.RED
        }

        color = level_colors.get(level, Colors.WHITE)

        if log_type == LogType.THINKING_DECISION:
            return self._format_thinking_decision(data or {})
        elif log_type == LogType.LOOP_DETECTED:
            return self._format_loop_detected(message, data or {})
        elif log_type == LogType.CLASSIFICATION:
            return self._format_classification(data or {})
        elif log_type == LogType.LOCALE_INJECTION:
            return self._format_locale_injection(message, data or {})
        else:
            level_str = f"[{level.name}]" if level != LogLevel.INFO else ""
            return f"{color}[{timestamp}] {level_str} {message}{Colors.ENDC}"

    def _format_classification(self, data: Dict[str, Any]) -> str:
        """Format task classification scores"""
        timestamp = self._format_timestamp()
        return (f"{Colors.GRAY}[{timestamp}] [CLASSIFY] type={data.get('task_type', '?')} "
                f"reasoning={data.get('reasoning_score', 0)} "
                f"execution={data.get('execution_score', 0)} "
                f"preview={data.get('text_preview', '')!r}{Colors.ENDC}")

    def _format_locale_injection(self, message: str, data: Dict[str, Any]) -> str:
        """Format where the English directive went"""
        timestamp = self._format_timestamp()
        return (f"{Colors.GRAY}[{timestamp}] [LOCALE] {message} "
                f"(role={data.get('role')}, index={data.get('message_index')}){Colors.ENDC}")

    def _format_thinking_decision(self, data: Dict[str, Any]) -> str:
        """Format the per-request thinking decision"""
        output = []
        timestamp = self._format_timestamp()
        enabled = data.get('thinking_enabled', False)
        state_color = Colors.GREEN if enabled else Colors.GRAY

        output.append(f"{Colors.CYAN}[{timestamp}] THINKING {state_color}"
                      f"{'ENABLED' if enabled else 'DISABLED'}{Colors.ENDC}")
        output.append(f"{Colors.GRAY}Task type: {data.get('task_type', '?')} "
                      f"(reasoning={data.get('reasoning_score', 0)}, "
                      f"execution={data.get('execution_score', 0)}){Colors.ENDC}")
        output.append(f"{Colors.GRAY}Budget: {data.get('budget', '?')} - "
                      f"{data.get('budget_description', '')}{Colors.ENDC}")
        if 'locale_injected' in data:
            output.append(f"{Colors.GRAY}English enforced: {data['locale_injected']}{Colors.ENDC}")

        return '\n'.join(output)

    def _format_loop_detected(self, message: str, data: Dict[str, Any]) -> str:
        """Format a planning loop warning"""
        timestamp = self._format_timestamp()
        return (f"{Colors.RED}[{timestamp}] [LOOP] {message} "
                f"(consecutive thinking blocks={data.get('consecutive_blocks', '?')}, "
                f"threshold={data.get('threshold', '?')}){Colors.ENDC}")

    def log(self, level: LogLevel, message: str,
            log_type: LogType = LogType.GENERAL,
            data: Optional[Dict[str, Any]] = None):
        """
        Main logging method

        Args:
            level: Log level
            message: Log message
            log_type: Type of log for special formatting
            data: Additional data for the log entry
        """
        if level.value < self.min_level.value:
            return

        if self.console_output:
            try:
                console_msg = self._format_console_message(level, message, log_type, data)
                if console_msg:
                    # Diagnostics go to stderr; stdout belongs to the proxied stream
                    print(console_msg, file=sys.stderr, flush=True)
            except UnicodeEncodeError:
                # Handle Unicode errors on Windows (cp1252 codec issues)
                safe_message = message.encode('ascii', 'replace').decode('ascii')
                print(f"[{self._format_timestamp()}] {safe_message}", file=sys.stderr, flush=True)

        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'logger': self.name,
            'level': level.name,
            'type': log_type.value,
            'message': message,
            'data': data or {}
        }

        if self.storage_callback:
            self.storage_callback(log_entry)

    # Convenience methods
    def debug(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.DEBUG, message, log_type, data)

    def info(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.INFO, message, log_type, data)

    def warning(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.WARNING, message, log_type, data)

    def error(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.ERROR, message, log_type, data)


# Global logger instance
_global_logger = None


def get_logger(name: str = "thinking_control", **kwargs) -> UnifiedLogger:
    """
    Get or create the global logger instance

    Args:
        name: Logger name
        **kwargs: Additional arguments for UnifiedLogger

    Returns:
        UnifiedLogger instance
    """
    global _global_logger
    if _global_logger is None:
        if 'min_level' not in kwargs:
            # Import here to avoid circular dependencies
            from thinking_control.config import DEBUG_MODE
            kwargs['min_level'] = LogLevel.DEBUG if DEBUG_MODE else LogLevel.INFO
        _global_logger = UnifiedLogger(name, **kwargs)
    else:
        if 'storage_callback' in kwargs:
            _global_logger.storage_callback = kwargs['storage_callback']
        if 'min_level' in kwargs:
            _global_logger.min_level = kwargs['min_level']
        if 'console_output' in kwargs:
            _global_logger.console_output = kwargs['console_output']
        if kwargs.get('enable_colors') is False:
            _global_logger.enable_colors = False
            Colors.disable()
    return _global_logger


def setup_cli_logger(enable_colors: bool = True, verbose: bool = False) -> UnifiedLogger:
    """Setup logger for CLI usage"""
    from thinking_control.config import DEBUG_MODE

    return get_logger(
        console_output=True,
        enable_colors=enable_colors,
        min_level=LogLevel.DEBUG if (DEBUG_MODE or verbose) else LogLevel.INFO
    )


# === Module-level convenience functions ===

def log(level: LogLevel, message: str,
        log_type: LogType = LogType.GENERAL,
        data: Optional[Dict[str, Any]] = None):
    """
    Module-level logging function using the global logger.

    Args:
        level: Log level
        message: Log message
        log_type: Type of log for special formatting
        data: Additional data for the log entry
    """
    logger = get_logger()
    logger.log(level, message, log_type, data)


def debug(message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
    """Log debug message using global logger."""
    log(LogLevel.DEBUG, message, log_type, data)


def info(message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
    """Log info message using global logger."""
    log(LogLevel.INFO, message, log_type, data)


def warning(message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
    """Log warning message using global logger."""
    log(LogLevel.WARNING, message, log_type, data)


def error(message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
    """Log error message using global logger."""
    log(LogLevel.ERROR, message, log_type, data)
