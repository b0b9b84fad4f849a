import pytest

from leadscout.services.leadgen.exceptions import (
    CompanyInsertionError,
    ConfigurationError,
    DatabaseError,
    EnrichmentError,
    InvalidJobTransitionError,
    JobNotFoundError,
    LeadGenError,
    LeadInsertionError,
    NoResultsError,
    SearchVendorError,
)


@pytest.mark.unit
class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigurationError,
            SearchVendorError,
            NoResultsError,
            JobNotFoundError,
            InvalidJobTransitionError,
            EnrichmentError,
            DatabaseError,
            LeadInsertionError,
            CompanyInsertionError,
        ],
    )
    def test_all_are_leadgen_errors(self, exc_class):
        assert issubclass(exc_class, LeadGenError)

    def test_insertion_errors_are_database_errors(self):
        assert issubclass(LeadInsertionError, DatabaseError)
        assert issubclass(CompanyInsertionError, DatabaseError)

    def test_message_preserved(self):
        with pytest.raises(LeadGenError, match="No LinkedIn profiles found"):
            raise NoResultsError("No LinkedIn profiles found")
