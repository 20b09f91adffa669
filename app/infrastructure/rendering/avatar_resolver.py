"""
Avatar URL resolver.
Default resolver handed to the comment block when the caller supplies none.
"""

from typing import Optional


class TemplateAvatarResolver:
    """
    Builds avatar URLs from a configured template such as
    ``https://cdn.example.com/avatars/{user_id}.png``.
    An empty template resolves every user to None.
    """

    def __init__(self, url_template: str = ""):
        self.url_template = url_template

    async def __call__(self, user_id: str) -> Optional[str]:
        if not self.url_template or not user_id:
            return None
        return self.url_template.format(user_id=user_id)
