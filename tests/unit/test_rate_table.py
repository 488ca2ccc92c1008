"""
Rate Table Unit Tests

Tests for default_rates and resolve_policy_rates.
"""
from types import SimpleNamespace

from services.rate_table import RATE_FIELDS, PolicyRates, default_rates, resolve_policy_rates

PROVIDER = SimpleNamespace(name='acme insurance', tds=10, gst=18, agent_rate=99, our_rate=99)
VEHICLE_CLASS = SimpleNamespace(name='two wheeler', agent_rate=5, our_rate=3)


class TestDefaultRates:
    """Tests for rate defaults by provider and vehicle class."""

    def test_rates_come_from_their_own_source(self):
        """agent/our rates come from the vehicle class, tds/gst from the provider."""
        rates = default_rates(PROVIDER, VEHICLE_CLASS)

        assert rates == PolicyRates(agent_rate=5.0, our_rate=3.0, tds_rate=10.0, gst_rate=18.0)

    def test_provider_only(self):
        rates = default_rates(PROVIDER, None)

        assert rates.tds_rate == 10
        assert rates.gst_rate == 18
        assert rates.agent_rate is None
        assert rates.missing == ['agent_rate', 'our_rate']

    def test_vehicle_class_only(self):
        rates = default_rates(vehicle_class=VEHICLE_CLASS)

        assert rates.missing == ['tds_rate', 'gst_rate']

    def test_mappings_are_accepted(self):
        rates = default_rates({'tds': 2, 'gst': 12}, {'agent_rate': 1.5, 'our_rate': 0.5})

        assert rates.as_dict() == {'agent_rate': 1.5, 'our_rate': 0.5, 'tds_rate': 2.0, 'gst_rate': 12.0}

    def test_nothing_selected(self):
        assert default_rates().missing == list(RATE_FIELDS)


class TestResolvePolicyRates:
    """Tests for user-supplied rates winning over defaults."""

    def test_without_overrides_uses_defaults(self):
        assert resolve_policy_rates(PROVIDER, VEHICLE_CLASS) == default_rates(PROVIDER, VEHICLE_CLASS)

    def test_override_wins(self):
        rates = resolve_policy_rates(PROVIDER, VEHICLE_CLASS, {'agent_rate': 6.5, 'gst_rate': '12'})

        assert rates.agent_rate == 6.5
        assert rates.gst_rate == 12.0
        assert rates.our_rate == 3.0
        assert rates.tds_rate == 10.0

    def test_zero_override_is_kept(self):
        rates = resolve_policy_rates(PROVIDER, VEHICLE_CLASS, {'tds_rate': 0})

        assert rates.tds_rate == 0.0
        assert rates.missing == []

    def test_none_override_falls_back_to_default(self):
        rates = resolve_policy_rates(PROVIDER, VEHICLE_CLASS, {'our_rate': None})

        assert rates.our_rate == 3.0

    def test_overrides_fill_missing_sources(self):
        rates = resolve_policy_rates(None, VEHICLE_CLASS, {'tds_rate': 1, 'gst_rate': 5})

        assert rates.missing == []

    def test_unknown_override_keys_are_ignored(self):
        rates = resolve_policy_rates(PROVIDER, VEHICLE_CLASS, {'premium_amount': 100})

        assert 'premium_amount' not in rates.as_dict()
