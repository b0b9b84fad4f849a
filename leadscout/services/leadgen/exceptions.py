"""Custom exceptions for the leadgen service."""


class LeadGenError(Exception):
    """Base exception for all leadgen-related errors."""


class ConfigurationError(LeadGenError):
    """Raised when a required API key or setting is missing."""


class SearchVendorError(LeadGenError):
    """Raised when the search vendor returns an error or cannot be reached."""


class NoResultsError(LeadGenError):
    """Raised when a search yields nothing usable."""


class JobNotFoundError(LeadGenError):
    """Raised when a job id does not exist."""


class InvalidJobTransitionError(LeadGenError):
    """Raised when a job status change would leave a terminal state."""


class EnrichmentError(LeadGenError):
    """Raised when a single profile cannot be enriched or normalized."""


class DatabaseError(LeadGenError):
    """Base exception for database-related errors."""


class LeadInsertionError(DatabaseError):
    """Raised when inserting a lead fails."""


class CompanyInsertionError(DatabaseError):
    """Raised when inserting a company fails."""
