class _State:
    """Structure version counter shared by cached views."""

    def __init__(self):
        self.version = 0
        self._view_cache = {}

    def bump(self):
        self.version += 1

    def dirty_since(self, version: int) -> bool:
        return self.version > version
