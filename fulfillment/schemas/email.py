"""
fulfillment/schemas/email.py

Request schema for one message in a Resend batch call.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from fulfillment.domain import EmailPayload


class OutboundEmail(BaseModel):
    """
    One e-mail as the Resend batch endpoint expects it.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    from_address: str = Field(..., alias="from", min_length=1)
    to: list[str] = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    html: str

    @classmethod
    def from_payload(cls, payload: EmailPayload) -> "OutboundEmail":
        return cls(
            from_address=payload.from_address,
            to=[payload.to],
            subject=payload.subject,
            html=payload.html,
        )

    def to_request_dict(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)
