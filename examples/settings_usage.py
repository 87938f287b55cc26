"""Example: Using location query settings"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from location_query import SetQueryConfig, get_settings

settings = get_settings()
print(f"Save old query: {settings.is_save_old}")
print(f"Collision policy: {settings.collision_policy.value}")
print(f"Defaults: {SetQueryConfig.from_settings(settings).to_dict()}")
