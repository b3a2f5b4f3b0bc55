"""
Structured logging for face match operations.
Embedding vectors and photo payloads are never written to the log.
"""

import logging
from typing import Any, Dict


class StructuredLogger:
    """Structured logger for embedding and matching operations."""

    def __init__(self, name: str = "face_match"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = None):
        """Log a structured operation. Failures default to WARNING, everything else to INFO."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if level is None:
            level = logging.WARNING if status == "failed" else logging.INFO
        self.logger.log(level, message)

    def log_embedding_operation(self, operation: str, photo: str, status: str = "success", details: Dict[str, Any] = None):
        """Log an embedding operation. `photo` is a payload-free description of the input."""
        log_details = {"photo": photo}
        if details:
            log_details.update(details)

        self.log_operation(f"embedding.{operation}", status, log_details)

    def log_match_operation(self, query_dim: int, candidate_count: int, match_count: int,
                            threshold: float, top_n: int, skipped_mismatched: int = 0,
                            duration_ms: float = None):
        """Log a ranking pass."""
        log_details = {
            "query_dim": query_dim,
            "candidate_count": candidate_count,
            "match_count": match_count,
            "threshold": threshold,
            "top_n": top_n,
        }
        if skipped_mismatched:
            log_details["skipped_mismatched"] = skipped_mismatched
        if duration_ms is not None:
            log_details["duration_ms"] = duration_ms

        self.log_operation("match.rank", "success", log_details, level=logging.DEBUG)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def set_debug(self, enabled: bool) -> None:
        """Switch between DEBUG and INFO level."""
        self.logger.setLevel(logging.DEBUG if enabled else logging.INFO)


# Global logger instance
logger = StructuredLogger()
