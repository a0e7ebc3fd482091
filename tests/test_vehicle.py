#!/usr/bin/env python3
"""Tests for Vehicle class."""

from reminders import Vehicle


class TestVehicle:
    """Tests for Vehicle class."""

    def test_display_name_prefers_name(self):
        vehicle = Vehicle(1, "Bus #001", 24800, "Volvo", "B8RLE", 2019)
        assert vehicle.display_name == "Bus #001"

    def test_display_name_from_year_make_model(self):
        vehicle = Vehicle(2, None, 61250, "Ford", "Transit", 2021)
        assert vehicle.display_name == "2021 Ford Transit"

    def test_display_name_fallback_to_id(self):
        assert Vehicle(7, "").display_name == "Vehicle #7"

    def test_mileage_defaults_to_zero(self):
        assert Vehicle(1, "Bus", None).mileage == 0
