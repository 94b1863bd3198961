"""Exceptions for use in Ring Steward"""

# Ring Steward
# Copyright (C) 2025  Ring Steward developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


# ========== Base Application Exception ==========


class RingStewardException(Exception):
    """Base exception for all Ring Steward errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Assignment Exceptions ==========


class AssignmentException(RingStewardException):
    """Base exception for ring assignment errors."""

    pass


class CapacityException(AssignmentException):
    """Raised when a category needs more physical rings than are available.

    Attributes
    ----------
    required : int
        Number of rings the operation needs.
    available : int
        Number of rings that were supplied.
    """

    def __init__(self, message: str, required: int = 0, available: int = 0):
        super().__init__(message)
        self.required = required
        self.available = available

    @property
    def shortfall(self) -> int:
        """How many rings are missing."""
        return max(0, self.required - self.available)


class InvalidPoolException(AssignmentException):
    """Raised when a pool label is malformed or outside a category's pools."""

    pass


# ========== Competitor Exceptions ==========


class CompetitorException(RingStewardException):
    """Base exception for competitor-related errors."""

    pass


class InvalidCompetitorDataException(CompetitorException):
    """Raised when competitor data is invalid or incomplete."""

    pass


class DuplicateCompetitorException(CompetitorException):
    """Raised when attempting to add a competitor whose id already exists."""

    pass


# ========== Category Exceptions ==========


class CategoryException(RingStewardException):
    """Base exception for category-related errors."""

    pass


class InvalidCategoryException(CategoryException):
    """Raised when a category definition is invalid (e.g., zero pools)."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(RingStewardException):
    """Base exception for validation errors."""

    pass


class AgeValidationException(ValidationException):
    """Raised when an age value cannot be interpreted."""

    pass


class AltRingValidationException(ValidationException):
    """Raised when an alternate ring tag is not one of '', 'a' or 'b'."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(RingStewardException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(RingStewardException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
