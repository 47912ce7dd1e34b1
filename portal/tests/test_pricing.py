"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  NirmaanTech Portal - Pricing Engine Testing (Direct Python Tests)           ║
║                                                                              ║
║  1. fixed / unit totals are rate x quantity on the authoritative triple      ║
║  2. percentage totals are linear in the base value                           ║
║  3. discount badge never divides by zero and never goes negative             ║
║  4. split-rate policy only applies when switched on                          ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

import pytest

from portal import config
from portal.models import PriceType, Product, Role
from portal.services.pricing import (
    discount_percent,
    display_price,
    is_franchise_tier,
    line_total,
    unit_rate,
)


def make_fixed(**overrides):
    fields = dict(
        id=901, sku="TST-FIX", price_type=PriceType.FIXED, category="Test", city="Bangalore",
        name="Fixed Item", mrp=10000, selling_price=6000, franchise_price=4500,
    )
    fields.update(overrides)
    return Product(**fields)


def make_unit(**overrides):
    fields = dict(
        id=902, sku="TST-UNIT", price_type=PriceType.UNIT, unit_label="sqft", category="Test",
        city="Bangalore", name="Unit Item",
        mrp=1500, selling_price=1300, franchise_price=950,
        unit_rate_mrp=30, unit_rate_selling=26, unit_rate_franchise=19,
    )
    fields.update(overrides)
    return Product(**fields)


def make_percentage(**overrides):
    fields = dict(
        id=903, sku="TST-PCT", price_type=PriceType.PERCENTAGE, category="Loans",
        city="All Karnataka", name="Processing Fee", mrp=8, selling_price=6, franchise_price=4.5,
    )
    fields.update(overrides)
    return Product(**fields)


class TestTier:
    """Role / toggle -> pricing tier"""

    def test_franchise_role_always_franchise_tier(self):
        assert is_franchise_tier(Role.FRANCHISE) is True
        assert is_franchise_tier(Role.FRANCHISE, franchise_view=False) is True
        print("✅ Franchise role prices at franchise tier")

    @pytest.mark.parametrize("role", [Role.ADMIN, Role.TELECALLER, Role.PARTNER, Role.VENDOR, Role.GUEST])
    def test_other_roles_need_toggle(self, role):
        assert is_franchise_tier(role) is False
        assert is_franchise_tier(role, franchise_view=True) is True


class TestFixedAndUnit:
    """lineTotal == unitRate x quantity"""

    @pytest.mark.parametrize("quantity", [0, 1, 2, 7])
    def test_fixed_line_total_is_rate_times_quantity(self, quantity):
        product = make_fixed()
        for tier in (False, True):
            assert line_total(product, tier, quantity) == unit_rate(product, tier) * quantity
        assert line_total(product, False, quantity) == 6000 * quantity
        assert line_total(product, True, quantity) == 4500 * quantity

    def test_unit_reads_unit_triple_only(self):
        """Flat triple of a unit product is never read"""
        product = make_unit()
        assert unit_rate(product, False) == 26
        assert unit_rate(product, True) == 19
        assert line_total(product, False, 120) == 26 * 120
        assert line_total(product, True, 120) == 19 * 120
        print("✅ Unit product priced per sqft, flat triple ignored")

    def test_missing_rate_counts_as_zero(self):
        product = make_unit(unit_rate_selling=None, unit_rate_franchise=None)
        assert unit_rate(product, False) == 0
        assert line_total(product, True, 50) == 0


class TestPercentage:
    """Percentage products apply rate / 100 to the base value"""

    def test_rate_is_fraction(self):
        product = make_percentage()
        assert unit_rate(product, False) == pytest.approx(0.06)
        assert unit_rate(product, True) == pytest.approx(0.045)

    def test_line_total_on_base_value(self):
        product = make_percentage()
        assert line_total(product, False, 100000) == 6000
        assert line_total(product, True, 100000) == 4500
        print("✅ 6% of 1,00,000 = 6000")

    @pytest.mark.parametrize("base_value", [1000, 12500, 250000, 999999])
    def test_linear_in_base_value(self, base_value):
        product = make_percentage()
        single = line_total(product, False, base_value)
        assert line_total(product, False, base_value * 2) == pytest.approx(single * 2)
        assert single == pytest.approx(6 / 100 * base_value)


class TestDiscount:
    """Badge discount"""

    def test_discount_from_mrp(self):
        product = make_fixed()
        assert discount_percent(product, False) == 40
        assert discount_percent(product, True) == 55

    def test_zero_mrp_short_circuits(self):
        assert discount_percent(make_fixed(mrp=0), False) == 0
        assert discount_percent(make_unit(unit_rate_mrp=None), True) == 0
        print("✅ No division by zero on missing MRP")

    def test_zero_rate_shows_no_badge(self):
        product = Product(
            id=903, sku="TST-NOFR", price_type=PriceType.FIXED, category="Test", city="Bangalore",
            name="No Franchise Price", mrp=5000, selling_price=3500,
        )
        assert discount_percent(product, True) == 0
        assert discount_percent(product, False) == 30

    def test_percentage_never_shows_discount(self):
        assert discount_percent(make_percentage(), False) == 0
        assert discount_percent(make_percentage(), True) == 0

    def test_never_negative(self):
        product = make_fixed(mrp=5000, selling_price=6000)
        assert discount_percent(product, False) == 0

    def test_rounds_half_up(self):
        product = make_fixed(mrp=8, selling_price=7)
        assert discount_percent(product, False) == 13

    def test_unit_discount_uses_unit_rates(self):
        product = make_unit()
        # (30 - 26) / 30 = 13.33%
        assert discount_percent(product, False) == 13


class TestDisplayPrice:

    def test_labels(self):
        assert display_price(make_unit(), False)["label"] == "/sqft"
        assert display_price(make_percentage(), False)["label"] == "% of Value"
        assert display_price(make_fixed(), False)["label"] == ""

    def test_tier_price(self):
        card = display_price(make_fixed(), True)
        assert card["display_price"] == 4500
        assert card["mrp"] == 10000
        assert card["tier"] == "franchise"
        assert card["is_percentage"] is False


class TestSplitRate:
    """Threshold split-rate policy (opt-in)"""

    def make_split(self):
        return make_percentage(selling_price_threshold=12000, franchise_percent_above=5, franchise_percent_below=7)

    def test_disabled_by_default(self, monkeypatch):
        monkeypatch.setattr(config, "SPLIT_RATE_ENABLED", False)
        product = self.make_split()
        assert line_total(product, False, 20000) == pytest.approx(1200)

    def test_above_threshold_uses_above_percent(self, monkeypatch):
        monkeypatch.setattr(config, "SPLIT_RATE_ENABLED", True)
        product = self.make_split()
        assert line_total(product, False, 20000) == pytest.approx(1000)
        assert line_total(product, True, 20000) == pytest.approx(1000)

    def test_at_threshold_uses_below_percent(self, monkeypatch):
        monkeypatch.setattr(config, "SPLIT_RATE_ENABLED", True)
        product = self.make_split()
        assert line_total(product, False, 12000) == pytest.approx(840)
        assert line_total(product, True, 5000) == pytest.approx(350)

    def test_incomplete_policy_falls_back(self, monkeypatch):
        monkeypatch.setattr(config, "SPLIT_RATE_ENABLED", True)
        product = make_percentage(selling_price_threshold=12000)
        assert line_total(product, False, 20000) == pytest.approx(1200)
