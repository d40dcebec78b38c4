import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_NEWS_PATTERN = r"\bnews\b"


class ConfigError(Exception):
    """Raised when a configuration value is invalid."""
    pass


class EndOfListPolicy(Enum):
    """What the sequencer does when advancing past the last item."""
    WRAP = "wrap"
    REGENERATE = "regenerate"


@dataclass
class Probabilities:
    jingle: float = 0.7
    ad: float = 0.35
    talk_ad: float = 0.5

    def validate(self):
        for name in ('jingle', 'ad', 'talk_ad'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"Probability '{name}' must be between 0 and 1, got {value}")


@dataclass
class GenerationConfig:
    """Switches for the optional categories of one generation pass."""
    include_ads: bool = True
    include_weather: bool = True
    include_bridges: bool = True
    probabilities: Probabilities = field(default_factory=Probabilities)


@dataclass
class Config:
    data_path: Path = Path('data.json')
    ads_path: Optional[Path] = Path('ads.json')
    db_path: Path = Path.home() / '.local' / 'share' / 'radiodex' / 'playlists.db'
    base_path: str = ''
    log_file: Optional[Path] = None
    remote_base_url: str = '/api/play'
    end_of_list: EndOfListPolicy = EndOfListPolicy.WRAP
    talk_radio_keys: List[str] = field(default_factory=lambda: ['wctr'])
    news_pattern: str = DEFAULT_NEWS_PATTERN
    generation: GenerationConfig = field(default_factory=GenerationConfig)

    @classmethod
    def load_config(cls, config_path: Path) -> 'Config':
        """Load configuration from YAML file."""
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found at {config_path}")

        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

        if not isinstance(config_data, dict):
            raise ConfigError(f"Expected a mapping at the top of {config_path}")

        defaults = cls()
        generation_data = config_data.get('generation') or {}
        probability_data = config_data.get('probabilities') or {}
        for section, value in (('generation', generation_data), ('probabilities', probability_data)):
            if not isinstance(value, dict):
                raise ConfigError(f"'{section}' in {config_path} must be a mapping")

        talk_radio_keys = config_data.get('talk_radio_keys', defaults.talk_radio_keys)
        if talk_radio_keys is None:
            talk_radio_keys = []
        if not isinstance(talk_radio_keys, list) or not all(isinstance(k, str) for k in talk_radio_keys):
            raise ConfigError(f"'talk_radio_keys' in {config_path} must be a list of station keys")

        try:
            probabilities = Probabilities(
                jingle=float(probability_data.get('jingle', Probabilities.jingle)),
                ad=float(probability_data.get('ad', Probabilities.ad)),
                talk_ad=float(probability_data.get('talk_ad', Probabilities.talk_ad))
            )
            end_of_list = EndOfListPolicy(config_data.get('end_of_list', defaults.end_of_list.value))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value in {config_path}: {e}") from e
        probabilities.validate()

        ads_path = config_data.get('ads_path', str(defaults.ads_path))
        log_file = config_data.get('log_file')

        return cls(
            data_path=Path(config_data.get('data_path', defaults.data_path)),
            ads_path=Path(ads_path) if ads_path else None,
            db_path=Path(config_data.get('db_path', defaults.db_path)),
            base_path=config_data.get('base_path', defaults.base_path) or '',
            log_file=Path(log_file) if log_file else None,
            remote_base_url=config_data.get('remote_base_url', defaults.remote_base_url),
            end_of_list=end_of_list,
            talk_radio_keys=list(talk_radio_keys),
            news_pattern=config_data.get('news_pattern', defaults.news_pattern),
            generation=GenerationConfig(
                include_ads=bool(generation_data.get('include_ads', True)),
                include_weather=bool(generation_data.get('include_weather', True)),
                include_bridges=bool(generation_data.get('include_bridges', True)),
                probabilities=probabilities
            )
        )

    def save_config(self, config_path: Path):
        """Save configuration to YAML file."""
        probabilities = self.generation.probabilities
        config_data = {
            'data_path': str(self.data_path),
            'ads_path': str(self.ads_path) if self.ads_path else None,
            'db_path': str(self.db_path),
            'base_path': self.base_path,
            'log_file': str(self.log_file) if self.log_file else None,
            'remote_base_url': self.remote_base_url,
            'end_of_list': self.end_of_list.value,
            'talk_radio_keys': list(self.talk_radio_keys),
            'news_pattern': self.news_pattern,
            'generation': {
                'include_ads': self.generation.include_ads,
                'include_weather': self.generation.include_weather,
                'include_bridges': self.generation.include_bridges
            },
            'probabilities': {
                'jingle': probabilities.jingle,
                'ad': probabilities.ad,
                'talk_ad': probabilities.talk_ad
            }
        }

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            yaml.dump(config_data, f, default_flow_style=False)
