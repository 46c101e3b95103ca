"""
Citizen Config and Clock
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.config.limits import (
    DEFAULT_LIMITS,
    PlatformLimits,
    limits_from_env,
    limits_from_mapping,
)
from core.time.clock import FixedClock, unix_timestamp


class TestPlatformLimits:
    def test_defaults(self):
        assert DEFAULT_LIMITS.max_issuers == 10
        assert DEFAULT_LIMITS.max_name_bytes == 100
        assert DEFAULT_LIMITS.max_uri_bytes == 200
        assert DEFAULT_LIMITS.credential_symbol == "EDU"
        assert DEFAULT_LIMITS.monthly_yield_divisor == 100

    @pytest.mark.parametrize("field_name", ["max_issuers", "max_name_bytes", "monthly_yield_divisor"])
    def test_non_positive_rejected(self, field_name):
        with pytest.raises(ValueError):
            PlatformLimits(**{field_name: 0})

    def test_empty_symbol_rejected(self):
        with pytest.raises(ValueError):
            PlatformLimits(credential_symbol="")

    def test_to_dict(self):
        assert DEFAULT_LIMITS.to_dict()["max_issuers"] == 10


class TestLimitsFromMapping:
    def test_empty_mapping_gives_defaults(self):
        assert limits_from_mapping({}) is DEFAULT_LIMITS
        assert limits_from_mapping(None) is DEFAULT_LIMITS

    def test_override(self):
        assert limits_from_mapping({"max_issuers": 2}).max_issuers == 2

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError):
            limits_from_mapping({"max_properties": 5})


class TestLimitsFromEnv:
    def test_reads_citizen_variables(self):
        limits = limits_from_env({
            "CITIZEN_MAX_ISSUERS": "3",
            "CITIZEN_CREDENTIAL_SYMBOL": "CERT",
            "CITIZEN_MAX_URI_BYTES": "",
        })
        assert limits.max_issuers == 3
        assert limits.credential_symbol == "CERT"
        assert limits.max_uri_bytes == 200

    def test_non_integer_rejected(self):
        with pytest.raises(ValueError):
            limits_from_env({"CITIZEN_MAX_ISSUERS": "many"})


class TestClock:
    def test_fixed_clock_advances(self):
        clock = FixedClock(datetime(2026, 3, 1, tzinfo=timezone.utc))
        clock.advance(90)
        assert clock.now_utc() == datetime(2026, 3, 1, 0, 1, 30, tzinfo=timezone.utc)

    def test_fixed_clock_requires_aware_datetime(self):
        with pytest.raises(ValueError):
            FixedClock(datetime(2026, 3, 1))

    def test_unix_timestamp(self):
        assert unix_timestamp(datetime(1970, 1, 2, tzinfo=timezone.utc)) == 86_400
