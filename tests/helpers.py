"""Shared test doubles."""


class StubGenerator:
    """
    Deterministic replacement for ``numpy.random.Generator``.

    ``random`` always returns ``draw`` and ``integers`` always returns ``index``.
    """

    def __init__(self, draw: float = 0.0, index: int = 0):
        self.draw = draw
        self.index = index

    def random(self) -> float:
        return self.draw

    def integers(self, high: int) -> int:
        return min(self.index, high - 1)


class RecordingRenderer:
    """Renderer keeping every snapshot it receives."""

    def __init__(self):
        self.snapshots = []

    def __call__(self, snapshot):
        self.snapshots.append(snapshot)
