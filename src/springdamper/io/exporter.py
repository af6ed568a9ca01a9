"""
Response curve serialization module.

Exports sampled spring responses to JSON so tuning results can be inspected
or plotted by external tools.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np

from springdamper.core.params import SpringSettings
from springdamper.errors import InvalidParameterError
from springdamper.preview import ResponseCurve


@dataclass
class ResponseMetadata:
    """Metadata header for an exported response curve."""

    frequency: float
    damping: float
    response: Optional[float]  # None for an undamped spring
    k1: float
    k2: float
    k3: float
    duration: float
    n_samples: int
    dt: float
    start: float
    target: float
    mode: str
    schema_version: str = "1.0"


class ResponseExporter:
    """Exports response curves to a JSON document."""

    def __init__(self, precision: int = 4):
        """
        Initialize the exporter.

        Args:
            precision: Decimal places for floating point values.
        """
        self.precision = precision

    def _round(self, value: float) -> float:
        """Round to configured precision."""
        return round(float(value), self.precision)

    def _metadata(self, curve: ResponseCurve, settings: SpringSettings) -> ResponseMetadata:
        try:
            response = self._round(settings.response)
        except InvalidParameterError:
            response = None

        return ResponseMetadata(
            frequency=self._round(settings.frequency),
            damping=self._round(settings.damping),
            response=response,
            # Coefficients keep full precision so the settings can be rebuilt
            k1=float(settings.k1),
            k2=float(settings.k2),
            k3=float(settings.k3),
            duration=self._round(curve.duration),
            n_samples=curve.n_samples,
            dt=float(curve.dt),
            start=self._round(curve.start),
            target=self._round(curve.target),
            mode=curve.mode,
        )

    def build_document(
        self,
        curve: ResponseCurve,
        settings: SpringSettings,
        reference: Optional[np.ndarray] = None,
    ) -> dict[str, Any]:
        """
        Build the complete document dictionary.

        Args:
            curve: Sampled response.
            settings: Settings the curve was sampled with.
            reference: Optional ideal response at ``curve.times``.

        Returns:
            Dictionary ready for serialization.
        """
        if reference is not None and len(reference) != curve.n_samples:
            raise ValueError(
                f"Reference has {len(reference)} samples, curve has {curve.n_samples}"
            )

        samples = []
        for i in range(curve.n_samples):
            sample: dict[str, Any] = {
                "index": i,
                "time": self._round(curve.times[i]),
                "position": self._round(curve.positions[i]),
                "velocity": self._round(curve.velocities[i]),
            }
            if reference is not None:
                sample["reference"] = self._round(reference[i])
            samples.append(sample)

        metadata = self._metadata(curve, settings)
        return {
            "metadata": {
                "frequency": metadata.frequency,
                "damping": metadata.damping,
                "response": metadata.response,
                "k1": metadata.k1,
                "k2": metadata.k2,
                "k3": metadata.k3,
                "duration": metadata.duration,
                "n_samples": metadata.n_samples,
                "dt": metadata.dt,
                "start": metadata.start,
                "target": metadata.target,
                "mode": metadata.mode,
                "schema_version": metadata.schema_version,
            },
            "summary": {
                "minimum": self._round(curve.minimum),
                "maximum": self._round(curve.maximum),
                "overshoot": self._round(curve.overshoot),
                "final": self._round(curve.final),
            },
            "samples": samples,
        }

    def export_json(
        self,
        document: dict[str, Any],
        output_path: Union[str, Path],
        indent: int = 2,
    ) -> Path:
        """
        Write a document to a JSON file.

        Args:
            document: Dictionary from build_document().
            output_path: Destination path; parent directories are created.
            indent: JSON indentation level.

        Returns:
            Path to the written file.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w") as f:
            json.dump(document, f, indent=indent)

        return output_path
