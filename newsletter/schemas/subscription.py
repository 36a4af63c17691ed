from pydantic import BaseModel


class SubscriptionForm(BaseModel):
    """URL-encoded body of ``POST /subscriptions``.

    Both fields are required; presence is the only check applied.
    """

    email: str
    name: str
