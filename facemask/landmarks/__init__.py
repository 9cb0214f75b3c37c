"""Pupil and landmark locators consumed by the mask pipeline."""

from .mouth import MouthCornerLocator, read_cascade_dir
from .pupil import PupilLocator
from .voting import PerturbationVoter

__all__ = ["MouthCornerLocator", "PerturbationVoter", "PupilLocator", "read_cascade_dir"]
