"""
HTTP Payload Schema Models for the PAY402 Payment Flow

This module defines the Pydantic models used to decode a server's 402 Payment
Required body and to describe the normalized payment options handed to the
payer callback.

The payment flow consists of:
1. Server answers a request with 402 and a PaymentChallenge body
2. Client picks the PaymentAccept entry carrying the gas-free transfer scheme
3. Client derives PaymentOption entries and asks the payer to settle one
4. Client retries the original request with the proof-of-payment header

Wire field names are camelCase; every model accepts both the wire alias and
the snake_case attribute name.
"""

from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field, ConfigDict, field_validator


# ============================================================================
# Server's 402 Payment Required Response
# ============================================================================

class PaymentAccept(BaseModel):
    """One payment offer within a 402 challenge.

    Every field is optional so that partially-formed offers still decode; the
    extraction rules decide whether an offer is usable.

    Attributes:
        scheme: Payment scheme identifier (e.g. "exact").
        network: Network identifier (e.g. "base").
        max_amount_required: Required amount as a decimal string; JSON numbers
            are converted to their string form.
        resource: URL of the protected resource.
        description: Free-text description, carries the scheme marker.
        mime_type: MIME type of the protected resource.
        pay_to: Payment destination address.
        max_timeout_seconds: Advertised timeout, informational only and kept as sent.
        asset: Asset identifier (contract address or symbol).
        output_schema: Opaque schema, never interpreted.
        extra: Optional metadata, may contain a human-readable asset ``name``.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    scheme: Optional[str] = None
    network: Optional[str] = None
    max_amount_required: Optional[str] = Field(default=None, alias="maxAmountRequired")
    resource: Optional[str] = None
    description: Optional[str] = None
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    pay_to: Optional[str] = Field(default=None, alias="payTo")
    max_timeout_seconds: Optional[Any] = Field(default=None, alias="maxTimeoutSeconds")
    asset: Optional[str] = None
    output_schema: Optional[Any] = Field(default=None, alias="outputSchema")
    extra: Optional[Dict[str, Any]] = None

    @field_validator("max_amount_required", mode="before")
    @classmethod
    def _amount_as_string(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def asset_name(self) -> Optional[str]:
        """Human-readable asset name from ``extra``, if it is a non-empty string."""
        if not self.extra:
            return None
        name = self.extra.get("name")
        return name if isinstance(name, str) and name else None


class PaymentChallenge(BaseModel):
    """Decoded body of a 402 Payment Required response.

    Attributes:
        x402_version: Protocol version.
        error: Server's error message.
        accepts: Ordered payment offers.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    x402_version: Optional[int] = Field(default=None, alias="x402Version")
    error: Optional[str] = None
    accepts: List[PaymentAccept] = Field(default_factory=list)

    def find_accept(self, marker: str) -> Optional[PaymentAccept]:
        """
        Return the first accept entry whose description contains ``marker``.

        Later matching entries are ignored.
        """
        for accept in self.accepts:
            if accept.description and marker in accept.description:
                return accept
        return None


# ============================================================================
# Normalized Payment Choice
# ============================================================================

class PaymentOption(BaseModel):
    """Currency-agnostic payment choice offered to the payer callback.

    Attributes:
        amount: Amount as a decimal string.
        currency: Currency symbol or human-readable asset name.
        pay_to: Destination address.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    amount: str = Field(..., description="Amount as a decimal string")
    currency: str = Field(..., description="Currency symbol or asset name")
    pay_to: Optional[str] = Field(default=None, alias="payTo", description="Destination address")
