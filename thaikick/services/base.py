# thaikick/services/base.py
"""
Common plumbing for ThaiKick services.

A service owns the unit of work: repositories flush, the service decides
when the session commits. Every public operation is timed and counted
through ``measure_operation``.
"""

from contextlib import contextmanager
from functools import wraps
import logging
import time
from typing import Any, Callable, Iterator, Optional, TypeVar, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import DomainException, RepositoryException, ServiceException
from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class BaseService:
    def __init__(self, db: Session):
        self.db = db
        self.logger = logging.getLogger(self.__class__.__name__)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Commit everything written inside the block, or nothing.

        Storage failures surface as ``ServiceException(PERSISTENCE_FAILURE)``;
        any other exception (a booking conflict, say) rolls back and
        propagates unchanged.
        """
        try:
            yield self.db
            self.db.commit()
        except (SQLAlchemyError, RepositoryException) as e:
            self.db.rollback()
            self.logger.error(f"Rolled back after storage failure: {e}")
            raise ServiceException(
                f"Database operation failed: {e}", code="PERSISTENCE_FAILURE"
            ) from e
        except Exception:
            self.db.rollback()
            raise

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Time a service method and report it to Prometheus.

        Domain refusals (unknown gym, slot taken, bad transition) are
        counted as ``rejected``; anything else that escapes is an ``error``.
        """

        def decorator(func: F) -> F:
            @wraps(func)
            def wrapper(self: "BaseService", *args: Any, **kwargs: Any) -> Any:
                started = time.perf_counter()
                status = "success"
                error_type: Optional[str] = None
                try:
                    return func(self, *args, **kwargs)
                except DomainException as e:
                    status, error_type = "rejected", e.code or type(e).__name__
                    raise
                except Exception as e:
                    status, error_type = "error", type(e).__name__
                    raise
                finally:
                    elapsed = time.perf_counter() - started
                    if elapsed > settings.slow_operation_threshold_seconds:
                        self.logger.warning(f"{operation_name} took {elapsed:.2f}s")
                    prometheus_metrics.record_service_operation(
                        service=self.__class__.__name__,
                        operation=operation_name,
                        duration=elapsed,
                        status=status,
                        error_type=error_type,
                    )

            return cast(F, wrapper)

        return decorator

    def log_operation(self, operation: str, **context: Any) -> None:
        self.logger.info(f"Operation: {operation}", extra={"operation": operation, **context})
