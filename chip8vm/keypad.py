NUM_KEYS = 16


class Keypad:
    """State of the 16 logical keys 0-F, independent of any physical layout."""

    def __init__(self):
        self.keys = [False] * NUM_KEYS

    def press(self, key):
        self.keys[key] = True

    def release(self, key):
        self.keys[key] = False

    def release_all(self):
        self.keys = [False] * NUM_KEYS

    def is_pressed(self, key):
        return self.keys[key]
