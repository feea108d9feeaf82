"""Exceptions for use in Partner Pairing"""

# Partner Pairing
# Copyright (C) 2025  Partner Pairing developers
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


class PartnerPairingException(Exception):
    """Base exception for all Partner Pairing errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(PartnerPairingException):
    """Base exception for team formation errors."""

    pass


class InsufficientPlayersException(PairingException):
    """Raised when the roster cannot supply both an Upper and a Lower player."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(PartnerPairingException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class TournamentCompleteException(TournamentException):
    """Raised when a round or group is requested beyond the planned rounds."""

    pass


class NoGroupAvailableException(TournamentException):
    """Raised when a round is scheduled before any group of teams exists."""

    pass


class GroupNotFoundException(TournamentException):
    """Raised when a requested group does not exist."""

    pass


class GroupRegenerationException(TournamentException):
    """Raised when a group can no longer be regenerated."""

    pass


class RoundNotFoundException(TournamentException):
    """Raised when a requested round does not exist."""

    pass


# ========== Player Exceptions ==========


class PlayerException(PartnerPairingException):
    """Base exception for player-related errors."""

    pass


class EmptyRosterException(PlayerException):
    """Raised when a roster without players is loaded."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    pass


class DuplicatePlayerException(PlayerException):
    """Raised when attempting to add a player that already exists."""

    pass


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    pass


class PlayerLockedException(PlayerException):
    """Raised when the roster is edited after teams were formed from it."""

    pass


# ========== Match Exceptions ==========


class MatchException(PartnerPairingException):
    """Base exception for match lifecycle errors."""

    pass


class MatchNotFoundException(MatchException):
    """Raised when a requested match cannot be found."""

    pass


class InvalidMatchTransitionException(MatchException):
    """Raised when a match cannot move to the requested status."""

    pass


class MatchAlreadyFinalizedException(InvalidMatchTransitionException):
    """Raised when any transition is attempted on a completed match."""

    pass


class InvalidResultException(MatchException):
    """Raised when a result is invalid (e.g., score out of range)."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(PartnerPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


# ========== Resource Exceptions ==========


class ResourceException(PartnerPairingException):
    """Base exception for resource-related errors."""

    pass


class SnapshotLoadException(ResourceException):
    """Raised when a tournament snapshot cannot be loaded."""

    pass


class SnapshotSaveException(ResourceException):
    """Raised when a tournament snapshot cannot be saved."""

    pass
