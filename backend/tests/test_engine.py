"""
Tests for the validation coordinator: report laws, scenarios and fault handling
"""

from dataclasses import replace
from types import MappingProxyType

import pytest

from customs_sim.models.customs import DeclarationRecord, OverallStatus, Severity
from customs_sim.samples import SAMPLE_DECLARATIONS
from customs_sim.validation import CustomsValidationEngine, create_validator, status_message


def comparable(report):
    return report.model_dump(exclude={"validation_time"})


def sample_record(name):
    return DeclarationRecord.model_validate(SAMPLE_DECLARATIONS[name]["data"])


class TestScenarios:
    """End-to-end declaration scenarios"""

    def test_clean_record_passes(self, engine, clean_record):
        report = engine.validate(clean_record)

        assert report.overall_status == OverallStatus.PASS
        assert report.errors == ()
        assert report.warnings == ()
        assert report.customs_ready is True

    def test_gross_below_net(self, engine, make_record):
        report = engine.validate(make_record(grossWeight=5, netWeight=10))

        assert [f.field for f in report.errors] == ["grossWeight"]
        assert "毛重不能小于净重" in report.errors[0].error
        assert report.customs_ready is False

    def test_total_amount_mismatch(self, engine, make_record):
        record = make_record(
            totalAmountForeign=100,
            goods=[{
                "goodsCode": "6109100021000",
                "goodsNameSpec": "棉制针织男式T恤",
                "quantity": 10,
                "unitPrice": 5.00,
                "totalPrice": 50.00,
            }],
        )

        report = engine.validate(record)

        finding = next(f for f in report.errors if f.field == "totalAmountForeign")
        assert finding.auto_fix is True
        assert finding.fix_value == 50.00

    def test_short_goods_code(self, engine, make_record):
        report = engine.validate(make_record(line={"goodsCode": "123456789"}))

        finding = next(f for f in report.errors if f.field == "goods[0].goodsCode")
        assert finding.severity == Severity.CRITICAL
        assert finding.auto_fix is True
        assert finding.fix_value == "0000123456789"

    def test_missing_export_port(self, engine, make_record):
        report = engine.validate(make_record(exportPort=None))

        assert any(f.field == "exportPort" for f in report.errors)
        assert report.overall_status != OverallStatus.PASS

    def test_warnings_only(self, engine, make_record):
        report = engine.validate(make_record(transportName=None))

        assert report.overall_status == OverallStatus.WARNING
        assert report.customs_ready is True

    def test_suggestions_never_block(self, engine):
        report = engine.validate(sample_record("low_value_general_trade"))

        assert [f.field for f in report.suggestions] == ["supervisionMode"]
        assert report.overall_status == OverallStatus.PASS
        assert report.customs_ready is True


class TestReportLaws:
    """Properties that hold for every report"""

    @pytest.mark.parametrize("sample", sorted(SAMPLE_DECLARATIONS))
    def test_status_and_readiness_laws(self, engine, sample):
        report = engine.validate(sample_record(sample))

        if report.errors:
            assert report.overall_status == OverallStatus.ERROR
        elif report.warnings:
            assert report.overall_status == OverallStatus.WARNING
        else:
            assert report.overall_status == OverallStatus.PASS
        assert report.customs_ready == (len(report.errors) == 0)

    @pytest.mark.parametrize("sample", sorted(SAMPLE_DECLARATIONS))
    def test_partition_keeps_every_finding(self, engine, sample):
        record = sample_record(sample)
        emitted = [f for checker in engine.checkers for f in checker.check(record)]

        report = engine.validate(record)

        assert len(report.errors) + len(report.warnings) + len(report.suggestions) == len(emitted)
        assert all(f.severity == Severity.CRITICAL for f in report.errors)
        assert all(f.severity == Severity.WARNING for f in report.warnings)
        assert all(f.severity == Severity.SUGGESTION for f in report.suggestions)
        # stable order within a bucket
        assert list(report.errors) == [f for f in emitted if f.severity == Severity.CRITICAL]

    @pytest.mark.parametrize("sample", sorted(SAMPLE_DECLARATIONS))
    def test_validation_is_idempotent(self, engine, sample):
        record = sample_record(sample)
        assert comparable(engine.validate(record)) == comparable(engine.validate(record))

    def test_record_is_not_mutated(self, engine):
        record = sample_record("inconsistent")
        before = record.model_dump()

        engine.validate(record)

        assert record.model_dump() == before

    def test_checkers_run_field_logic_compliance(self, engine):
        report = engine.validate(sample_record("inconsistent"))

        assert [f.field for f in report.warnings] == [
            "transportMode",
            "currency",
            "grossWeight",
            "goods[0].totalPrice",
            "goods[0].goodsNameSpec",
            "goods[1].goodsNameSpec",
        ]


class TestCheckCounts:
    """total_checks / passed_count bookkeeping"""

    def test_clean_record_counts(self, engine, clean_record):
        report = engine.validate(clean_record)

        # 15 base + 8 per line + 2 weights + 1 exchange rate
        assert report.total_checks == 26
        assert report.passed_count == 26

    def test_counts_without_weights_or_rate(self, engine, make_record):
        record = make_record(grossWeight=None, netWeight=10, exchangeRate=None)
        assert engine.calculate_total_checks(record) == 23

    def test_counts_scale_with_goods_lines(self, engine, make_record, clean_data):
        lines = [dict(clean_data["goods"][0], itemNo=i) for i in range(1, 4)]
        record = make_record(goods=lines)
        assert engine.calculate_total_checks(record) == 15 + 3 * 8 + 2 + 1

    def test_passed_count_is_not_clamped(self, engine, tables, make_record):
        bad_line = {
            "goodsCode": None,
            "goodsNameSpec": "",
            "quantity": 0,
            "unitPrice": 0,
            "totalPrice": 5,
        }
        record = make_record(
            consignorConsignee=None, exportPort=None, transportMode=None, declareDate=None,
            currency=None, totalAmountForeign=None, grossWeight=None, netWeight=None,
            exchangeRate=None, billNo=None,
            goods=[bad_line],
        )

        report = engine.validate(record)

        assert report.total_checks == 23
        assert len(report.findings) == 11
        assert report.passed_count == 23 - 11

        sparse_tables = replace(tables, check_counts=MappingProxyType({"base": 5, "per_goods_line": 1}))
        sparse_report = CustomsValidationEngine(sparse_tables).validate(record)
        assert sparse_report.total_checks == 6
        assert sparse_report.passed_count == 6 - 11


class TestSystemFault:
    """Unexpected checker failures become a report, not an exception"""

    def test_checker_exception_becomes_system_finding(self, tables, clean_record, monkeypatch, caplog):
        engine = CustomsValidationEngine(tables)

        def explode(record):
            raise RuntimeError("boom")

        monkeypatch.setattr(engine.checkers[1], "check", explode)

        report = engine.validate(clean_record)

        assert report.overall_status == OverallStatus.ERROR
        assert report.customs_ready is False
        assert report.passed_count == 0
        assert report.total_checks == 0
        assert len(report.errors) == 1
        assert report.errors[0].field == "system"
        assert report.errors[0].error == "校验系统发生错误"
        assert report.warnings == () and report.suggestions == ()
        assert "Validation engine fault" in caplog.text

    def test_validation_time_is_recorded(self, engine, clean_record):
        assert engine.validate(clean_record).validation_time >= 0


class TestStatusMessage:
    """User-facing verdict lines"""

    @pytest.mark.parametrize("status,expected", [
        ("pass", "🎉 校验通过，可以提交申报"),
        (OverallStatus.WARNING, "⚠️ 存在警告，建议优化后申报"),
        ("error", "❌ 存在严重错误，需修复后申报"),
        ("unknown", "校验状态未知"),
    ])
    def test_status_messages(self, status, expected):
        assert status_message(status) == expected


def test_create_validator_uses_configured_tables():
    engine = create_validator()
    assert "USD" in engine.tables.currencies
