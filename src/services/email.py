"""
Admin notification emails sent through MS Graph.
"""

from azure.identity import ClientSecretCredential
from msgraph import GraphServiceClient
from msgraph.generated.models.body_type import BodyType
from msgraph.generated.models.email_address import EmailAddress
from msgraph.generated.models.item_body import ItemBody
from msgraph.generated.models.message import Message
from msgraph.generated.models.recipient import Recipient
from msgraph.generated.users.item.send_mail.send_mail_post_request_body import (
    SendMailPostRequestBody,
)

from core.config import (
    ADMIN_EMAIL,
    FROM_EMAIL,
    GRAPH_APP_ID,
    GRAPH_CLIENT_SECRET,
    GRAPH_TENANT_ID,
    SITE_NAME,
)
from models.records import Member

_graph_client: GraphServiceClient | None = None


def get_graph_client() -> GraphServiceClient:
    """Get or create the MS Graph client (lazy initialization)."""
    global _graph_client
    if _graph_client is None:
        credential = ClientSecretCredential(
            tenant_id=GRAPH_TENANT_ID,
            client_id=GRAPH_APP_ID,
            client_secret=GRAPH_CLIENT_SECRET,
        )
        _graph_client = GraphServiceClient(credentials=credential)
    return _graph_client


def email_configured() -> bool:
    return all([GRAPH_TENANT_ID, GRAPH_APP_ID, GRAPH_CLIENT_SECRET, FROM_EMAIL, ADMIN_EMAIL])


def format_registration_email(member: Member) -> tuple[str, str]:
    """Subject and plain-text body announcing a pending registration."""
    subject = f"{SITE_NAME} - New member pending approval: {member['name']}"
    lines = [
        "A new member has registered and is waiting for approval.",
        "",
        f"Name:  {member['name']}",
        f"Email: {member['email']}",
        f"Lot:   {member['lot']}",
        f"Phone: {member['phone'] or '—'}",
        "",
        "Approve the account from the admin members page.",
    ]
    return subject, "\n".join(lines)


async def send_registration_email(member: Member) -> bool:
    """
    Notify the admin address of a new registration.

    Returns False (and never raises) when email is not configured or sending
    fails; registration does not depend on it.
    """
    if not email_configured():
        print("Email not configured, skipping registration notice")
        return False

    subject, body_text = format_registration_email(member)
    message = Message(
        subject=subject,
        body=ItemBody(content_type=BodyType.Text, content=body_text),
        to_recipients=[Recipient(email_address=EmailAddress(address=ADMIN_EMAIL))],
    )
    request_body = SendMailPostRequestBody(message=message, save_to_sent_items=True)

    try:
        await get_graph_client().users.by_user_id(FROM_EMAIL).send_mail.post(request_body)
        print(f"Sent registration notice to {ADMIN_EMAIL}")
        return True
    except Exception as e:
        print(f"Failed to send registration notice: {e}")
        return False
