from typing import Optional


class MemoryClipboard:
    # presse-papier en mémoire, garde la dernière valeur copiée
    def __init__(self):
        self.value: Optional[str] = None

    def write(self, text: str) -> None:
        self.value = text
