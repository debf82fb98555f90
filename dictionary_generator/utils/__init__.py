"""
Utility modules for Dictionary Generator.
"""

from .run_log import LogType, RunLog, format_line

__all__ = ['LogType', 'RunLog', 'format_line']
