# -*- coding: utf-8 -*-
"""Tests for the batch calculator."""

import pytest

from biochar_corc.batch import BatchCalculator
from biochar_corc.calculator import CORCCalculator, calculate_corcs
from biochar_corc.config import CORCConfig
from biochar_corc.exceptions import DomainError


class TestBatchCalculator:

    def test_results_in_input_order(self, input_factory):
        masses = [float(m) for m in range(1, 13)]
        inputs = [input_factory(dry_mass_tonnes=m) for m in masses]

        batch = BatchCalculator(max_workers=4).calculate_batch(inputs)

        assert [item.index for item in batch.items] == list(range(len(masses)))
        nets = [r.net_corcs_tco2e for r in batch.results]
        assert nets == sorted(nets)
        assert nets[0] == calculate_corcs(inputs[0]).net_corcs_tco2e

    def test_error_isolation(self, input_factory):
        inputs = [
            input_factory(),
            input_factory(dry_mass_tonnes=-1.0),
            input_factory(),
        ]

        batch = BatchCalculator().calculate_batch(inputs)

        assert batch.successful_count == 2
        assert batch.failed_count == 1
        assert batch.results[1] is None
        failed = batch.get_failed()[0]
        assert failed.index == 1
        assert failed.error_code == "CORC_DOMAIN_ERROR"
        assert "dry_mass_tonnes" in failed.error
        assert batch.total_net_corcs_tco2e == pytest.approx(
            2 * calculate_corcs(inputs[0]).net_corcs_tco2e
        )

    def test_stop_on_error(self, input_factory):
        inputs = [input_factory(), input_factory(dry_mass_tonnes=-1.0)]

        with pytest.raises(DomainError):
            BatchCalculator().calculate_batch(inputs, continue_on_error=False)

    def test_progress_callback(self, input_factory):
        calls = []
        inputs = [input_factory() for _ in range(3)]

        BatchCalculator().calculate_batch(
            inputs, progress_callback=lambda done, total: calls.append((done, total)),
        )

        assert len(calls) == 3
        assert calls[-1] == (3, 3)

    def test_warnings_counted(self, input_factory):
        inputs = [input_factory(), input_factory(mean_soil_temp_c=45.0)]

        batch = BatchCalculator().calculate_batch(inputs)

        assert batch.warning_count == 1
        assert any("outside 7-40" in w for w in batch.get_warnings())

    def test_empty_batch(self):
        batch = BatchCalculator().calculate_batch([])

        assert batch.items == []
        assert batch.total_net_corcs_tco2e == 0
        assert batch.to_dict()["total_calculations"] == 0

    def test_max_workers_from_config(self):
        calculator = CORCCalculator(CORCConfig(batch_max_workers=2))
        assert BatchCalculator(calculator).max_workers == 2
