"""GA-GWO job-to-machine assignment for makespan minimisation."""

__version__ = "0.1.0"
