"""
Contributions Drawer - draw ASCII art on the GitHub contributions graph with backdated commits.
"""

from .models import CommitSpec, DrawConfig, DrawError, ErrorKind, GridError, ParseResult, RotatingPool
from .dates import DateMapper
from .parser import GridParser
from .generator import CommitScriptGenerator, commit_count
from .main import main

__all__ = [
    'CommitSpec',
    'DrawConfig',
    'DrawError',
    'ErrorKind',
    'GridError',
    'ParseResult',
    'RotatingPool',
    'DateMapper',
    'GridParser',
    'CommitScriptGenerator',
    'commit_count',
    'main'
]
