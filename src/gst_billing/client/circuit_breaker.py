"""
Circuit breaker guarding the REST backend

Consecutive transport failures open the circuit; after the recovery
window a limited number of trial requests decide whether it closes again.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum

from gst_billing.exceptions import NetworkError


logger = logging.getLogger(__name__)


class CircuitState(str, Enum):
    """Circuit breaker states"""
    CLOSED = "CLOSED"
    OPEN = "OPEN"
    HALF_OPEN = "HALF_OPEN"


@dataclass
class CircuitBreakerConfig:
    """Circuit breaker thresholds"""
    failure_threshold: int = 5
    recovery_timeout: int = 30000  # milliseconds
    success_threshold: int = 3


class CircuitBreaker:
    """
    Failure counter with CLOSED -> OPEN -> HALF_OPEN transitions

    Example:
        >>> breaker = CircuitBreaker(CircuitBreakerConfig(failure_threshold=2))
        >>> breaker.before_request()
        >>> breaker.record_failure()
    """

    def __init__(self, config: CircuitBreakerConfig) -> None:
        self.config = config
        self.reset(quiet=True)

    @property
    def state(self) -> CircuitState:
        return self._state

    def _open(self) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = time.monotonic()

    def before_request(self) -> None:
        """
        Raises:
            NetworkError: NET05 while the recovery window is still running
        """
        if self._state != CircuitState.OPEN:
            return

        elapsed = time.monotonic() - self._opened_at
        remaining = self.config.recovery_timeout / 1000.0 - elapsed
        if remaining > 0:
            raise NetworkError.circuit_breaker_open(int(remaining))

        self._state = CircuitState.HALF_OPEN
        self._successes = 0
        logger.info("Circuit half-open, allowing trial requests")

    def record_success(self) -> None:
        if self._state == CircuitState.CLOSED:
            self._failures = 0
            return

        if self._state == CircuitState.HALF_OPEN:
            self._successes += 1
            if self._successes >= self.config.success_threshold:
                self.reset(quiet=True)
                logger.info("Circuit closed after recovery")

    def record_failure(self) -> None:
        if self._state == CircuitState.HALF_OPEN:
            self._open()
            logger.warning("Trial request failed, circuit open again")
            return

        if self._state == CircuitState.CLOSED:
            self._failures += 1
            if self._failures >= self.config.failure_threshold:
                self._open()
                logger.warning(f"Circuit opened after {self._failures} consecutive failures")

    def reset(self, quiet: bool = False) -> None:
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._successes = 0
        self._opened_at = 0.0
        if not quiet:
            logger.info("Circuit manually reset")
