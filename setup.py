"""setuptools setup for the GridGoal focus engine.

Install for development:
    pip install -e ".[test]"
    pytest
"""

from setuptools import setup

setup(
    name="gridgoal",
    version="0.1.0",
    packages=[
        "gridgoal",
        "gridgoal.database",
        "gridgoal.stats",
        "gridgoal.timer",
    ],
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.4",
        "SQLAlchemy>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": ["gridgoal=gridgoal.__main__:main"],
    },
)
