"""Prefix Registry — loads, validates and stores prefix assignments as YAML.

The registry file pins each model to its prefix so that identifiers minted
today still decode after new models are added:

    version: "1"
    prefixes:
      'acc': account
      'inv': invoice

Prefix keys are quoted so YAML keywords such as ``off`` or ``yes`` stay
strings. New models are derived with every stored prefix reserved, so existing
assignments never move.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

import yaml
from pydantic import ValidationError

from puidv7.core.codec import PREFIX_PATTERN
from puidv7.core.config import settings
from puidv7.core.errors import PrefixRegistryError
from puidv7.core.models import PrefixAssignments
from puidv7.core.prefixer import MODEL_NAME_PATTERN, check_model_names, derive_prefixes

logger = logging.getLogger(__name__)


class PrefixRegistry:
    """File-backed store of prefix assignments, cached after first load."""

    def __init__(self, path: Optional[str] = None):
        self._assignments: Optional[PrefixAssignments] = None
        self._path = Path(path or settings.prefixes_file)
        if not self._path.is_absolute():
            self._path = settings.project_root / self._path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load_from_yaml(self, yaml_content: str) -> PrefixAssignments:
        """Parse and validate prefix assignments from a YAML string."""
        try:
            raw = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise PrefixRegistryError(f"Invalid prefix registry YAML: {e}") from e
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise PrefixRegistryError("Prefix registry YAML must be a mapping")

        try:
            assignments = PrefixAssignments(
                version=str(raw.get("version", "1")),
                prefixes=raw.get("prefixes") or {},
            )
        except ValidationError as e:
            raise PrefixRegistryError(f"Invalid prefix registry: {e}") from e

        errors = self.validate_assignments(assignments)
        if errors:
            raise PrefixRegistryError("Prefix registry validation errors", errors)
        return assignments

    def validate_assignments(self, assignments: PrefixAssignments) -> list[str]:
        """Validate assignment integrity. Returns list of error messages (empty = valid)."""
        errors: list[str] = []
        seen: dict[str, str] = {}

        for prefix, model in assignments.prefixes.items():
            if not PREFIX_PATTERN.fullmatch(prefix):
                errors.append(f"Prefix '{prefix}': must be 3 lowercase a-z characters")
            if not MODEL_NAME_PATTERN.fullmatch(model):
                errors.append(f"Prefix '{prefix}': invalid model name '{model}'")
            elif len(model) < 3:
                errors.append(f"Prefix '{prefix}': model name '{model}' is shorter than 3 characters")
            if model in seen:
                errors.append(
                    f"Model '{model}' assigned to both '{seen[model]}' and '{prefix}'"
                )
            else:
                seen[model] = prefix

        return errors

    def load(self) -> PrefixAssignments:
        """Load assignments from the registry file."""
        if not self._path.exists():
            raise FileNotFoundError(f"Prefix registry not found: {self._path}")

        assignments = self.load_from_yaml(self._path.read_text())
        self._assignments = assignments
        logger.info(f"Loaded {len(assignments.prefixes)} prefixes from {self._path}")
        return assignments

    def get(self) -> PrefixAssignments:
        """Get cached assignments or load them from disk."""
        if self._assignments is None:
            return self.load()
        return self._assignments

    def save(self, assignments: PrefixAssignments) -> None:
        """Validate and write assignments to the registry file."""
        errors = self.validate_assignments(assignments)
        if errors:
            raise PrefixRegistryError("Prefix registry validation errors", errors)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w") as f:
            yaml.safe_dump(assignments.model_dump(), f, sort_keys=False)
        self._assignments = assignments
        logger.info(f"Saved {len(assignments.prefixes)} prefixes to {self._path}")

    def assign(self, model_names: Sequence[str]) -> PrefixAssignments:
        """Assign prefixes to new models, keeping stored assignments unchanged.

        Models already in the registry are skipped. Does not write to disk;
        call ``save`` with the result.
        """
        check_model_names(model_names)
        if self._assignments is not None or self.exists():
            current = self.get()
        else:
            current = PrefixAssignments()

        known = set(current.model_names())
        new_models = [m for m in model_names if m not in known]
        derived = derive_prefixes(new_models, reserved=current.prefixes)

        merged = dict(current.prefixes)
        merged.update(derived)
        if derived:
            logger.info(f"Assigned {len(derived)} new prefixes: {derived}")
        return PrefixAssignments(version=current.version, prefixes=merged)

    def prefix_for(self, model: str) -> str:
        """Look up the prefix assigned to a model."""
        for prefix, name in self.get().prefixes.items():
            if name == model:
                return prefix
        raise KeyError(f"No prefix assigned to model '{model}'")

    def model_for(self, prefix: str) -> str:
        """Look up the model a prefix is assigned to."""
        prefixes = self.get().prefixes
        if prefix not in prefixes:
            raise KeyError(f"Prefix '{prefix}' is not assigned")
        return prefixes[prefix]
