"""
Configuration settings management
Centralized configuration using environment variables
"""
import os
from pathlib import Path
from functools import lru_cache
from dotenv import load_dotenv


VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables"""
    
    # Logging
    log_level: str = "INFO"
    
    # Note header
    note_title: str = "Study Notes"
    note_module: str = "Agile Extension v2"
    
    # Generation thresholds
    min_words_standard: int = 100
    min_words_strict: int = 300
    min_candidate_count: int = 5
    simulated_delay: float = 0.0
    
    # Request defaults
    strict_mode: bool = False
    domain_vocabulary: str = ""
    
    def __init__(self):
        """Load settings from environment variables"""
        # Load .env file from project root
        env_path = Path(__file__).parent.parent.parent / '.env'
        if env_path.exists():
            load_dotenv(env_path)
        else:
            load_dotenv()
        
        self.log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
        
        self.note_title = os.getenv('NOTE_TITLE', 'Study Notes')
        self.note_module = os.getenv('NOTE_MODULE', 'Agile Extension v2')
        
        self.min_words_standard = int(os.getenv('MIN_WORDS_STANDARD', '100'))
        self.min_words_strict = int(os.getenv('MIN_WORDS_STRICT', '300'))
        self.min_candidate_count = int(os.getenv('MIN_CANDIDATE_COUNT', '5'))
        self.simulated_delay = float(os.getenv('SIMULATED_DELAY', '0.0'))
        
        self.strict_mode = _env_bool('STRICT_MODE', False)
        self.domain_vocabulary = os.getenv('DOMAIN_VOCABULARY', '')
        
        # Validate settings
        self._validate()
    
    def min_words_for(self, strict_mode: bool) -> int:
        """Minimum excerpt word count for the given mode"""
        return self.min_words_strict if strict_mode else self.min_words_standard
    
    def _validate(self):
        """Validate settings"""
        problems = []
        if self.log_level not in VALID_LOG_LEVELS:
            problems.append(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)} (got {self.log_level})")
        for key, value in {
            'MIN_WORDS_STANDARD': self.min_words_standard,
            'MIN_WORDS_STRICT': self.min_words_strict,
            'MIN_CANDIDATE_COUNT': self.min_candidate_count,
        }.items():
            if value <= 0:
                problems.append(f"{key} must be positive (got {value})")
        if self.simulated_delay < 0:
            problems.append(f"SIMULATED_DELAY must not be negative (got {self.simulated_delay})")
        
        if problems:
            raise ValueError(
                f"Invalid configuration: {'; '.join(problems)}\n"
                f"Please fix them in .env file or environment variables"
            )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
