import pytest

from rebalancer.domain import AssetClass
from rebalancer.exceptions import (
    ConfigurationError,
    ImportFormatError,
    MarketDataError,
    RebalancerError,
    ValidationError,
)


@pytest.mark.unit
class TestExceptions:
    def test_hierarchy(self) -> None:
        assert issubclass(ValidationError, RebalancerError)
        assert issubclass(ImportFormatError, ValidationError)
        assert issubclass(ConfigurationError, RebalancerError)
        assert issubclass(MarketDataError, RebalancerError)

    def test_validation_error_from_string(self) -> None:
        error = ValidationError("bad")
        assert error.errors == ["bad"]
        assert str(error) == "bad"

    def test_validation_error_joins_messages(self) -> None:
        error = ValidationError(["one", "two"])
        assert error.errors == ["one", "two"]
        assert str(error) == "one; two"

    def test_configuration_error_message(self) -> None:
        error = ConfigurationError(AssetClass.CRYPTO)
        assert error.asset_class is AssetClass.CRYPTO
        assert str(error) == "No class target configured for CRYPTO"

    def test_configuration_error_equality(self) -> None:
        assert ConfigurationError(AssetClass.CASH) == ConfigurationError(AssetClass.CASH)
        assert ConfigurationError(AssetClass.CASH) != ConfigurationError(AssetClass.BONDS)
        assert len({ConfigurationError(AssetClass.CASH), ConfigurationError(AssetClass.CASH)}) == 1
