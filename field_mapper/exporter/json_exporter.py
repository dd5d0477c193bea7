"""JSON exporter."""
import dataclasses
import json
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class JsonExporter:
    """Export mapped entities to JSON."""

    def to_data(self, entity: Any) -> Any:
        """Convert an entity (or list of entities) to JSON-ready values."""
        if dataclasses.is_dataclass(entity) and not isinstance(entity, type):
            return {f.name: self.to_data(getattr(entity, f.name)) for f in dataclasses.fields(entity)}
        if isinstance(entity, (list, tuple)):
            return [self.to_data(item) for item in entity]
        if isinstance(entity, dict):
            return {str(k): self.to_data(v) for k, v in entity.items()}
        if isinstance(entity, Enum):
            return entity.value
        if isinstance(entity, (datetime, date)):
            return entity.isoformat()
        return entity

    def dumps(self, entity: Any) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_data(entity), indent=2, default=str, ensure_ascii=False)

    def export(
        self,
        output_file: Path,
        entities: List[Any],
        profile_name: str,
        failures: Optional[List[str]] = None,
    ) -> None:
        """Export to JSON file."""
        output_file.parent.mkdir(parents=True, exist_ok=True)

        data: Dict[str, Any] = {
            "metadata": {
                "created_at": datetime.now().isoformat(),
                "profile": profile_name,
                "total_records": len(entities),
                "failures": failures or [],
            },
            "data": self.to_data(entities),
        }

        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str, ensure_ascii=False)
