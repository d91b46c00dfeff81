"""
ParameterBag

Case-insensitive key/value store backing ``%placeholder%`` resolution.
"""

from typing import Any, Dict, Mapping, Optional

from .exceptions import ParameterNotFoundError


class ParameterBag:
    """Holds container parameters.

    Names are lower-cased on every read and write, so ``Mailer.Transport``
    and ``mailer.transport`` address the same entry. Values are stored
    as-is and keep their native type.

    Example::

        bag = ParameterBag({"Mailer.Transport": "smtp"})
        bag.get("mailer.transport")  # "smtp"
    """

    def __init__(self, parameters: Optional[Mapping[str, Any]] = None):
        self._parameters: Dict[str, Any] = {}
        if parameters:
            self.add(parameters)

    def has(self, name: str) -> bool:
        return name.lower() in self._parameters

    def get(self, name: str) -> Any:
        """Return the value of a parameter.

        Raises:
            ParameterNotFoundError: When the parameter is not set
        """
        key = name.lower()
        if key not in self._parameters:
            raise ParameterNotFoundError(
                f'The parameter "{key}" must be defined.', name=key
            )
        return self._parameters[key]

    def set(self, name: str, value: Any) -> None:
        self._parameters[name.lower()] = value

    def add(self, parameters: Mapping[str, Any]) -> None:
        """Merge parameters into the bag, later values win."""
        for name, value in parameters.items():
            self.set(name, value)

    def all(self) -> Dict[str, Any]:
        return dict(self._parameters)

    def clear(self) -> None:
        self._parameters.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __len__(self) -> int:
        return len(self._parameters)
