"""
Structured logging for the context-retrieval pipeline.
Every pipeline step is logged as an operation with a status and details.
"""

import logging
from typing import Any, Dict, Optional


def sanitize_text(text: Optional[str], limit: int = 50) -> Optional[str]:
    """Truncate transcript text before it lands in a log line."""
    if text is None:
        return None
    return text[:limit] + "..." if len(text) > limit else text


class StructuredLogger:
    """Structured logger for embedding, matching, generation and supersession events."""

    def __init__(self, name: str = "signconnect"):
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

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if status in ("failed", "degraded"):
            self.logger.warning(message)
        else:
            self.logger.info(message)

    def log_transcript(self, sequence_number: int, text: str):
        """Log an accepted transcript update."""
        self.log_operation("transcript.submitted", "accepted", {
            "sequence_number": sequence_number,
            "text": sanitize_text(text)
        })

    def log_embedding(self, sequence_number: int, status: str = "success", details: Dict[str, Any] = None):
        """Log a vectorization attempt."""
        log_details = {"sequence_number": sequence_number}
        if details:
            log_details.update(details)

        self.log_operation("vector.embed", status, log_details)

    def log_match(self, sequence_number: int, label: Optional[str], score: float, candidates: int):
        """Log the similarity search outcome."""
        self.log_operation("vector.match", "matched" if label else "no_match", {
            "sequence_number": sequence_number,
            "label": label,
            "score": round(float(score), 4),
            "candidates": candidates
        })

    def log_generation(self, sequence_number: int, status: str = "success", details: Dict[str, Any] = None):
        """Log a suggestion generator call."""
        log_details = {"sequence_number": sequence_number}
        if details:
            log_details.update(details)

        self.log_operation("suggestions.generate", status, log_details)

    def log_supersession(self, sequence_number: int, newer: int, phase: str):
        """Log a stale request being dropped."""
        self.log_operation("orchestrator.superseded", "discarded", {
            "sequence_number": sequence_number,
            "newer_sequence_number": newer,
            "phase": phase
        })

    def log_degraded(self, component: str, reason: str):
        """Log degraded-mode operation for a component."""
        self.log_operation(f"{component}.degraded", "degraded", {"reason": sanitize_text(reason, 100)})

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()
