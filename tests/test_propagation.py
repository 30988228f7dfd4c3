import math

import pytest

from freqradio.errors import DomainError, UnknownUnitError, ValidationError
from freqradio.propagation import field_strength, free_space_loss, fresnel_zone, link_budget
from freqradio.propagation.link_budget import MarginStatus, margin_status
from freqradio.utils.constants import C_0, ETA_0, RECEIVER_SENSITIVITIES_DBM


class TestFreeSpaceLoss:
    def test_2400mhz_1km(self):
        r = free_space_loss(2400, "MHz", 1, "km")
        assert r.fspl_db == pytest.approx(100.0, abs=0.1)
        assert r.distance_m == pytest.approx(1000.0)
        assert r.band == "UHF"

    def test_received_power(self):
        r = free_space_loss(2400, "MHz", 1, "km")
        powers = {p.tx_power_w: p.rx_power_dbm for p in r.received_power}
        assert powers[1.0] == pytest.approx(30.0 - r.fspl_db)
        assert powers[1000.0] == pytest.approx(60.0 - r.fspl_db)

    def test_isotropic_field(self):
        r = free_space_loss(2400, "MHz", 1, "km")
        assert r.field_strength_v_m == pytest.approx(math.sqrt(30) / 1000)
        assert r.far_field_distance_m == pytest.approx(2 * C_0 / 2.4e9)

    def test_zero_distance(self):
        with pytest.raises(ValidationError) as exc:
            free_space_loss(2400, "MHz", 0, "km")
        assert exc.value.field == "distance"


class TestLinkBudget:
    def test_two_metre_link(self):
        r = link_budget(144, "MHz", 50, "km", 50, "W",
                        tx_gain_dbi=10, rx_gain_dbi=6, tx_loss_db=1)
        assert r.tx_power_dbm == pytest.approx(10 * math.log10(50_000))
        assert r.eirp_dbm == pytest.approx(r.tx_power_dbm + 10 - 1)
        assert r.rx_power_dbm == pytest.approx(r.eirp_dbm - r.fspl_db)
        assert r.signal_dbm == pytest.approx(r.rx_power_dbm + 6)
        assert r.total_path_loss_db == pytest.approx(r.fspl_db + 1)
        assert r.path_efficiency_percent == pytest.approx(r.rx_power_w / 50 * 100)
        assert len(r.margins) == len(RECEIVER_SENSITIVITIES_DBM)
        assert all(m.status is MarginStatus.EXCELLENT for m in r.margins)

    def test_margin_arithmetic(self):
        r = link_budget(2400, "MHz", 10, "km", 100, "mW")
        wifi = next(m for m in r.margins if m.mode == "WiFi 802.11g")
        assert wifi.margin_db == pytest.approx(r.signal_dbm + 85.0)

    def test_log_power_units_accept_negative(self):
        r = link_budget(433, "MHz", 1, "km", -10, "dBm")
        assert r.tx_power_dbm == pytest.approx(-10.0)
        assert r.tx_power_w == pytest.approx(1e-4)

    def test_zero_watts(self):
        with pytest.raises(ValidationError) as exc:
            link_budget(144, "MHz", 10, "km", 0, "W")
        assert exc.value.field == "tx_power"

    def test_negative_loss(self):
        with pytest.raises(ValidationError) as exc:
            link_budget(144, "MHz", 10, "km", 5, "W", rx_loss_db=-2)
        assert exc.value.field == "rx_loss_db"

    def test_margin_status(self):
        assert margin_status(10.5) is MarginStatus.EXCELLENT
        assert margin_status(10.0) is MarginStatus.GOOD
        assert margin_status(4.0) is MarginStatus.FAIR
        assert margin_status(1.0) is MarginStatus.MARGINAL
        assert margin_status(0.0) is MarginStatus.INSUFFICIENT


class TestFresnel:
    def test_mid_path(self):
        r = fresnel_zone(2400, "MHz", 10, "km")
        lam = C_0 / 2.4e9
        assert r.d1_m == pytest.approx(5000.0)
        assert r.first_zone_radius_m == pytest.approx(math.sqrt(lam * 2500.0))
        assert r.clearance_60_m == pytest.approx(0.6 * r.first_zone_radius_m)
        assert r.earth_bulge_m == pytest.approx(5000.0 ** 2 / (2 * 6_371_000))
        assert r.recommended_height_m == pytest.approx(r.clearance_60_m + r.earth_bulge_m)

    def test_higher_zones(self):
        r = fresnel_zone(2400, "MHz", 10, "km")
        assert [z.zone for z in r.zones] == [1, 2, 3, 4, 5]
        for z in r.zones:
            assert z.radius_m == pytest.approx(r.first_zone_radius_m * math.sqrt(z.zone))

    def test_position_percent(self):
        r = fresnel_zone(2400, "MHz", 10, "km", position=25)
        assert r.d1_m == pytest.approx(2500.0)
        assert r.d2_m == pytest.approx(7500.0)

    def test_position_length(self):
        r = fresnel_zone(2400, "MHz", 10, "km", position=2, position_unit="km")
        assert r.d1_m == pytest.approx(2000.0)

    @pytest.mark.parametrize("position", [0, 100, 150])
    def test_position_at_or_beyond_ends(self, position):
        with pytest.raises(DomainError) as exc:
            fresnel_zone(2400, "MHz", 10, "km", position=position)
        assert exc.value.field == "position"

    def test_position_unknown_unit(self):
        with pytest.raises(UnknownUnitError):
            fresnel_zone(2400, "MHz", 10, "km", position=2, position_unit="furlongs")

    def test_clearance_table(self):
        r = fresnel_zone(5800, "MHz", 3, "km")
        impact = {c.clearance_fraction: c.additional_loss_db for c in r.clearance_impact}
        assert impact[0.6] == 0.0
        assert impact[0.0] == 6.0


class TestFieldStrength:
    def test_100w_at_1km(self):
        r = field_strength(100, "W", 0, "dBi", 1000, "m")
        assert r.eirp_w == pytest.approx(100.0)
        assert r.e_field_v_m == pytest.approx(math.sqrt(3000) / 1000)
        assert r.e_field_dbuv_m == pytest.approx(20 * math.log10(math.sqrt(3000) * 1000))
        assert r.h_field_a_m == pytest.approx(r.e_field_v_m / ETA_0)
        assert r.power_density_w_m2 == pytest.approx(100 / (4 * math.pi * 1e6))

    def test_dbd_gain(self):
        r = field_strength(10, "W", 0, "dBd", 1, "km")
        assert r.gain_dbi == pytest.approx(2.14)
        assert r.eirp_dbm == pytest.approx(40.0 + 2.14)

    def test_dbm_power(self):
        r = field_strength(30, "dBm", 0, "dBi", 10, "m")
        assert r.power_w == pytest.approx(1.0)

    def test_zero_power(self):
        with pytest.raises(ValidationError) as exc:
            field_strength(0, "W", 0, "dBi", 10, "m")
        assert exc.value.field == "power"
