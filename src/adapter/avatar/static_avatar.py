"""AvatarProvider returning a configured static image."""

DEFAULT_AVATAR_PATH = "/static/avatars/default.png"


class StaticAvatarProvider:
    def __init__(self, image: str = DEFAULT_AVATAR_PATH):
        self.image = image

    def get_default_image(self) -> str:
        return self.image
