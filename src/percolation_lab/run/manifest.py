"""
Run configuration and manifest.

The RunConfig loads a YAML run definition. The manifest lists the result
files a run is expected to produce and checks which of them already exist.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass


@dataclass
class ExperimentSpec:
    """A single threshold experiment: grid size and number of trials."""
    n: int
    trials: int

    @property
    def name(self) -> str:
        return f"n{self.n}_t{self.trials}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExperimentSpec':
        """Build from a {n, trials} mapping, validating both values."""
        if not isinstance(data, dict):
            raise ValueError(f"Experiment must be a mapping with 'n' and 'trials', got {data!r}")

        missing = [key for key in ('n', 'trials') if key not in data]
        if missing:
            raise ValueError(f"Experiment {data!r} is missing: {', '.join(missing)}")

        n, trials = data['n'], data['trials']
        for key, value in (('n', n), ('trials', trials)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"Experiment '{key}' must be a positive integer, got {value!r}")

        return cls(n=n, trials=trials)


class RunConfig:
    """
    Loads and validates a run configuration YAML.

    Example:
        config = RunConfig.from_yaml('config/threshold_scan.yaml')
        print(config.run_name)
        print(config.experiments)
    """

    def __init__(self, data: Dict[str, Any]):
        self._data = data
        self._validate()

    @classmethod
    def from_yaml(cls, path: str) -> 'RunConfig':
        """Load run config from YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Run config not found: {path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Run config must be a YAML mapping: {path}")

        return cls(data)

    def _validate(self):
        """Validate required config sections."""
        required_sections = ['run_name', 'experiments', 'output']
        for section in required_sections:
            if section not in self._data:
                raise ValueError(f"Missing required config section: '{section}'")

        if not self._data['experiments']:
            raise ValueError("Config section 'experiments' is empty")
        output = self._data['output']
        if not isinstance(output, dict) or 'base_dir' not in output:
            raise ValueError("Missing required output setting: 'base_dir'")

        # Parse eagerly so that a bad experiment fails at load time
        self._experiments = [ExperimentSpec.from_dict(e) for e in self._data['experiments']]
        names = [spec.name for spec in self._experiments]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate experiments: {', '.join(duplicates)}")

        seed = self._data.get('seed')
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
            raise ValueError(f"Config 'seed' must be a non-negative integer, got {seed!r}")

    # --- Properties ---

    @property
    def run_name(self) -> str:
        return self._data['run_name']

    @property
    def description(self) -> str:
        return self._data.get('description', '')

    @property
    def seed(self) -> Optional[int]:
        return self._data.get('seed')

    @property
    def experiments(self) -> List[ExperimentSpec]:
        return list(self._experiments)

    # --- Output paths ---

    @property
    def base_dir(self) -> Path:
        return Path(self._data['output']['base_dir'])

    @property
    def results_dir(self) -> Path:
        return self.base_dir / self._data['output'].get('results_dir', 'results')

    @property
    def summary_csv(self) -> Path:
        return self.base_dir / self._data['output'].get('summary_csv', 'summary.csv')

    # --- Manifest ---

    def expected_outputs(self) -> Dict[str, Path]:
        """Map experiment name to the .stats file it should produce."""
        return {
            spec.name: self.results_dir / f"{spec.name}.stats"
            for spec in self._experiments
        }

    def pending_experiments(self) -> List[ExperimentSpec]:
        """Experiments whose .stats file does not exist yet."""
        outputs = self.expected_outputs()
        return [spec for spec in self._experiments if not outputs[spec.name].exists()]
