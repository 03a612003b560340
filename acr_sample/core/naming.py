# -----------------------------------------------------------------------------
# RESOURCE NAMING
# -----------------------------------------------------------------------------
# Responsibility: Random, per-run unique names for Azure resources.
#
# Names are '<prefix><0..9998>'. Azure names are global for some resources
# (registries, DNS labels) so every run draws fresh ones.
# -----------------------------------------------------------------------------

import random

# Suffix range for random names (exclusive upper bound)
NAME_SUFFIX_LIMIT = 9999
MAX_RANDOM_DRAWS = 50

# Fixed demo login for the Docker host VM
VM_ADMIN_USERNAME = "tirekicker"
VM_ADMIN_PASSWORD = "azure12345QWE!"


class NameExhaustedError(Exception):
    """Raised when every suffix for a prefix has already been handed out."""

    pass


class NameGenerator:
    """
    Hands out random resource names that never repeat within one run.

    Args:
        rng: Optional random source, for reproducible tests.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._issued: set[str] = set()

    @property
    def issued(self) -> frozenset[str]:
        return frozenset(self._issued)

    def create_random_name(self, prefix: str) -> str:
        """
        Return '<prefix><n>' with n in [0, NAME_SUFFIX_LIMIT).

        Raises:
            NameExhaustedError: If no unused suffix is left for the prefix.
        """
        for _ in range(MAX_RANDOM_DRAWS):
            name = f"{prefix}{self._rng.randrange(NAME_SUFFIX_LIMIT)}"
            if name not in self._issued:
                self._issued.add(name)
                return name

        # Crowded prefix: pick from whatever is still free
        free = [
            f"{prefix}{n}"
            for n in range(NAME_SUFFIX_LIMIT)
            if f"{prefix}{n}" not in self._issued
        ]
        if not free:
            raise NameExhaustedError(f"No free names left for prefix '{prefix}'")

        name = self._rng.choice(free)
        self._issued.add(name)
        return name


def create_username() -> str:
    return VM_ADMIN_USERNAME


def create_password() -> str:
    return VM_ADMIN_PASSWORD
