"""
Standardized exception hierarchy for the rewards engine
Provides rich context, consistent logging, and user-friendly error messages
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class RewardsEngineError(Exception):
    """
    Base exception for all rewards engine errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise RewardsEngineError(
            message="Failed to update rewards record",
            user_id="student-42",
            operation="record_answer",
            context={"difficulty": 2}
        )
    """

    log_level = logging.ERROR

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "An error occurred. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # 'message' is reserved by logging
            "request_id": self.request_id,
            "user_id": self.user_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.log(self.log_level, f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.log(self.log_level, f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for API responses"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Persistence Errors
# ==========================================

class DatabaseError(RewardsEngineError):
    """
    Base class for persistence-layer errors
    """
    pass


class PersistenceUnavailableError(DatabaseError):
    """Storage could not be reached or timed out. Callers decide whether to retry."""

    def __init__(self, message: str = "Persistence layer unavailable", **kwargs):
        super().__init__(
            message=message,
            user_message="We're having trouble saving your progress. Please try again in a moment.",
            **kwargs
        )


class QueryError(DatabaseError):
    """Database statement execution failed"""

    def __init__(
        self,
        message: str,
        query: Optional[str] = None,
        **kwargs
    ):
        self.query = query
        super().__init__(
            message=message,
            user_message="We encountered an issue saving your progress. Please try again.",
            context={"query": query},
            **kwargs
        )


# ==========================================
# Identity
# ==========================================

class NotAuthenticatedError(RewardsEngineError):
    """No user context is available for the request"""

    def __init__(self, message: str = "No authenticated user", **kwargs):
        super().__init__(
            message=message,
            user_message="Please sign in to track your rewards.",
            **kwargs
        )


class AuthenticationError(RewardsEngineError):
    """API credentials were rejected"""

    def __init__(
        self,
        message: str = "Authentication failed",
        **kwargs
    ):
        super().__init__(
            message=message,
            user_message="Authentication failed. Please check your credentials.",
            **kwargs
        )


# ==========================================
# Catalog & Configuration
# ==========================================

class InconsistentCatalogError(RewardsEngineError):
    """Achievement definition cannot be evaluated (e.g. unknown achievement type)"""

    # evaluate() warns once per unknown type
    log_level = logging.DEBUG

    def __init__(
        self,
        message: str,
        achievement_id: Optional[str] = None,
        achievement_type: Optional[str] = None,
        **kwargs
    ):
        self.achievement_id = achievement_id
        self.achievement_type = achievement_type
        super().__init__(
            message=message,
            user_message="Some achievements are temporarily unavailable.",
            context={"achievement_id": achievement_id, "achievement_type": achievement_type},
            **kwargs
        )


class ConfigurationError(RewardsEngineError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The system is not properly configured. Please contact support.",
            context={"config_key": config_key},
            **kwargs
        )


# ==========================================
# Helper Functions
# ==========================================

def wrap_external_exception(
    error: Exception,
    operation: str,
    user_id: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> RewardsEngineError:
    """
    Wrap driver exceptions (psycopg, pool timeouts) into our exception hierarchy

    Args:
        error: Original exception
        operation: What operation was being performed
        user_id: User ID if applicable
        context: Additional context

    Returns:
        Appropriate RewardsEngineError subclass

    Example:
        try:
            await cur.execute(query)
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="modify_record", user_id="student-42")
    """
    # Import here to avoid circular dependencies
    import psycopg
    from psycopg_pool import PoolTimeout

    if isinstance(error, RewardsEngineError):
        return error

    if isinstance(error, (psycopg.OperationalError, PoolTimeout, TimeoutError, OSError)):
        return PersistenceUnavailableError(
            message=f"Database unavailable: {str(error)}",
            user_id=user_id,
            operation=operation,
            context=context,
            cause=error
        )
    elif isinstance(error, psycopg.Error):
        return QueryError(
            message=f"Database query failed: {str(error)}",
            user_id=user_id,
            operation=operation,
            cause=error
        )

    # Generic fallback
    return RewardsEngineError(
        message=f"{operation} failed: {str(error)}",
        user_id=user_id,
        operation=operation,
        context=context,
        cause=error
    )
