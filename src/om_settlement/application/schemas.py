# src/om_settlement/application/schemas.py
from pydantic import AliasChoices, BaseModel, Field


class PaymentSentRequest(BaseModel):
    transaction_id: str = Field(
        validation_alias=AliasChoices("transaction_id", "transactionID")
    )
