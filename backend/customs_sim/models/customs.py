"""
Customs Declaration Data Models
Pydantic models for data validation and serialization
"""
from datetime import date
from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    SUGGESTION = "suggestion"


class OverallStatus(str, Enum):
    PASS = "pass"
    WARNING = "warning"
    ERROR = "error"


class CamelModel(BaseModel):
    """Immutable model serialized with the form layer's camelCase field names"""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, allow_inf_nan=False,
    )


class GoodsLine(CamelModel):
    """One goods item of an export declaration"""
    item_no: Optional[int] = None
    goods_code: Optional[str] = Field(None, description="13-digit customs commodity code")
    goods_name_spec: Optional[str] = Field(None, description="Goods name and specification")
    quantity: float
    unit: Optional[str] = None
    unit_price: float
    total_price: float
    currency: Optional[str] = None
    origin_country: Optional[str] = None
    final_dest_country: Optional[str] = None

    @field_validator('item_no', 'quantity', 'unit_price', 'total_price', mode='before')
    @classmethod
    def _blank_number_as_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class DeclarationRecord(CamelModel):
    """Export customs declaration as submitted by the declaration form.

    Fields the customs rules require are optional here: a missing value is
    reported as a validation finding rather than rejected while parsing.
    """
    # Basic information
    pre_entry_no: Optional[str] = None
    customs_no: Optional[str] = None
    consignor_consignee: Optional[str] = None
    declaration_unit: Optional[str] = None
    filing_no: Optional[str] = None
    license_no: Optional[str] = None

    # Trade information
    export_port: Optional[str] = None
    declare_date: Optional[date] = None
    transport_mode: Optional[str] = None
    transport_name: Optional[str] = None
    bill_no: Optional[str] = None
    supervision_mode: Optional[str] = None
    exemption_nature: Optional[str] = None
    trade_country: Optional[str] = None
    arrival_country: Optional[str] = None
    origin_country: Optional[str] = None

    # Financial information
    currency: Optional[str] = None
    exchange_rate: Optional[float] = None
    total_amount_foreign: Optional[float] = None
    total_amount_cny: Optional[float] = Field(None, alias="totalAmountCNY")
    freight: Optional[float] = None
    insurance: Optional[float] = None
    other_charges: Optional[float] = None

    # Packing and weights
    packages: Optional[int] = None
    package_type: Optional[str] = None
    gross_weight: Optional[float] = None
    net_weight: Optional[float] = None

    goods: Tuple[GoodsLine, ...] = ()

    # Declarations
    inspection_quarantine: Optional[bool] = None
    price_influence_factor: Optional[bool] = None
    payment_settlement_usage: Optional[bool] = None

    @field_validator(
        'declare_date', 'exchange_rate', 'total_amount_foreign', 'total_amount_cny',
        'freight', 'insurance', 'other_charges', 'packages', 'gross_weight', 'net_weight',
        mode='before',
    )
    @classmethod
    def _blank_as_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Finding(CamelModel):
    """A single validation finding, optionally carrying an automatic correction"""
    field: str = Field(..., description="Field path, e.g. goods[2].unitPrice")
    error: str
    suggestion: str
    severity: Severity
    auto_fix: bool = False
    fix_value: Optional[Any] = None


class ValidationReport(CamelModel):
    """Aggregated result of one declaration validation"""
    overall_status: OverallStatus
    validation_time: float = Field(..., ge=0.0, description="Elapsed seconds")
    errors: Tuple[Finding, ...] = ()
    warnings: Tuple[Finding, ...] = ()
    suggestions: Tuple[Finding, ...] = ()
    passed_count: int
    total_checks: int
    customs_ready: bool

    @property
    def findings(self) -> Tuple[Finding, ...]:
        return self.errors + self.warnings + self.suggestions


class ValidateRequest(BaseModel):
    """Body of a validation request"""
    document_id: Optional[str] = None
    declaration: DeclarationRecord


class AutoFixRequest(BaseModel):
    """Body of an auto-fix request"""
    declaration: DeclarationRecord
    finding: Finding
    revalidate: bool = True


class SubmissionResponse(BaseModel):
    """Response from customs submission"""
    document_id: Optional[str] = None
    submission_id: str
    status: str = "submitted"
    timestamp: str
    message: str
