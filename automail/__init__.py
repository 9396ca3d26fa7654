"""
Automail: deterministic simulation of mail delivery robots.

This framework provides:
- Seeded mail arrival scheduling
- A per-robot delivery state machine with pluggable strategies
- A tick-driven simulation engine with delivery scoring
- Multi-seed evaluation of strategy configurations

License: MIT
"""

__version__ = "1.0.0"

from automail.core.mail import MailItem, Storage
from automail.core.robot import Robot, RobotState
from automail.core.config import SimulationConfig
from automail.simulation.generator import MailGenerator
from automail.simulation.engine import SimulationEngine

__all__ = [
    # Version info
    "__version__",
    # Core classes
    "MailItem",
    "Storage",
    "Robot",
    "RobotState",
    "SimulationConfig",
    "MailGenerator",
    "SimulationEngine",
]
