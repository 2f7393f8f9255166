"""Element bookkeeping: covalent radii and the symbol <-> index table."""

from collections.abc import Iterable, Iterator, Mapping

from ase.data import atomic_numbers, covalent_radii


class UnknownElementError(KeyError):
    """Raised when an element symbol has no covalent radius."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(symbol)

    def __str__(self) -> str:
        return f"Unknown element symbol '{self.symbol}': no covalent radius available"


def covalent_radius(symbol: str, radii: Mapping[str, float] | None = None) -> float:
    """
    Look up the covalent radius of an element.

    Args:
        symbol: Element symbol (e.g., "Si", "O")
        radii: Optional overrides that take precedence over ASE's table

    Returns:
        Covalent radius in Angstroms

    Raises:
        UnknownElementError: If the symbol is not a known element
    """
    if radii and symbol in radii:
        return float(radii[symbol])

    # atomic_numbers also carries the placeholder "X" (Z=0), which is not a real element
    number = atomic_numbers.get(symbol)
    if not number:
        raise UnknownElementError(symbol)
    return float(covalent_radii[number])


class ElementTable:
    """
    Ordered table of unique element symbols.

    The position of a symbol is its element index, used as the array
    dimension of every per-element tensor. Lookups go both ways.
    """

    def __init__(self, symbols: Iterable[str] = ()):
        self._symbols: list[str] = []
        self._index: dict[str, int] = {}
        for symbol in symbols:
            self.add(symbol)

    @classmethod
    def from_symbols(cls, symbols: Iterable[str]) -> "ElementTable":
        """Build a table from symbols in order of first appearance."""
        return cls(symbols)

    def add(self, symbol: str) -> int:
        """Add a symbol if missing and return its index."""
        if symbol not in self._index:
            self._index[symbol] = len(self._symbols)
            self._symbols.append(symbol)
        return self._index[symbol]

    def index(self, symbol: str) -> int:
        """Return the element index of ``symbol``."""
        try:
            return self._index[symbol]
        except KeyError:
            raise KeyError(f"Element '{symbol}' is not in the element table {self.symbols}") from None

    def symbol(self, index: int) -> str:
        """Return the symbol stored at ``index``."""
        return self._symbols[index]

    @property
    def symbols(self) -> tuple[str, ...]:
        return tuple(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ElementTable):
            return NotImplemented
        return self._symbols == other._symbols

    def __repr__(self) -> str:
        return f"ElementTable({self._symbols!r})"
