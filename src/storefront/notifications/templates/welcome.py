"""Welcome template — sent when a user registers."""

from storefront.notifications.kind import NotificationKind


class WelcomeTemplate:
    kind = NotificationKind.WELCOME

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("name") or "there"
        return {
            "subject": f"Welcome to Burgerhub, {name}!",
            "body": (
                f"Hi {name},\n\n"
                "Thanks for joining Burgerhub. Browse the menu or stack your own "
                "burger in the builder.\n\n"
                "See you soon!\n"
                "The Burgerhub Team"
            ),
        }
