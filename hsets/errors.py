#hsets: computer-assisted proofs of travelling waves in FitzHugh-Nagumo
#Copyright (C) 2013  John Wendell Hall
#
#This program is free software: you can redistribute it and/or modify
#it under the terms of the GNU General Public License as published by
#the Free Software Foundation, either version 3 of the License, or
#(at your option) any later version.
#
#This program is distributed in the hope that it will be useful,
#but WITHOUT ANY WARRANTY; without even the implied warranty of
#MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#GNU General Public License for more details.
#
#You should have received a copy of the GNU General Public License
#along with this program.  If not, see <http://www.gnu.org/licenses/>.
#
#The author may be reached at jackhall@utexas.edu.


__all__ = ["ProofFailure", "GeometryPrecondition", "IsolationFailure",
           "CoveringFailure", "IntegrationInconsistency",
           "ConeConditionFailure"]


class ProofFailure(Exception):
    """
    Base class for every check that can stop a proof. Failures are
    deterministic: running the same check on the same parameter box fails
    the same way, so nothing catches these in order to retry.

    `kind` is a short machine-readable tag that the orchestration copies
    into its result record. Keyword arguments are kept in `details`, a dict
    holding the offending enclosures.

    Usage: raise IntegrationInconsistency("no crossing", speed=speed)
    """
    kind = "failure"

    def __init__(self, message, **details):
        Exception.__init__(self, message)
        self.details = details

    def report(self):
        return self.kind + ": " + str(self)


class GeometryPrecondition(ProofFailure):
    """Non-rigorous guesses (corner points, segment ends) are misordered."""
    kind = "geometry"


class IsolationFailure(ProofFailure):
    """
    A product of the vector field with an outward normal does not have the
    required strict sign. `face` names the face ("SL", "SR", "UL", "UR", or
    "slow" for the slow direction of a block), `link` the index of the chain
    link if there is one, and `hull` the offending enclosure.
    """
    kind = "isolation"

    def __init__(self, message, face=None, link=None, hull=None):
        ProofFailure.__init__(self, message, face=face, link=link, hull=hull)
        self.face, self.link, self.hull = face, link, hull

    def report(self):
        text = ProofFailure.report(self)
        if self.face is not None:
            text += " [face " + str(self.face)
            if self.link is not None:
                text += ", link " + str(self.link)
            text += "]"
        if self.hull is not None:
            text += " hull=" + str(self.hull)
        return text


class CoveringFailure(ProofFailure):
    """A covering relation between two h-sets could not be verified."""
    kind = "covering"

    def __init__(self, message, link=None, **details):
        ProofFailure.__init__(self, message, link=link, **details)
        self.link = link

    def report(self):
        text = ProofFailure.report(self)
        if self.link is not None:
            text += " [link " + str(self.link) + "]"
        return text


class IntegrationInconsistency(ProofFailure):
    """
    Rigorous integration failed, or an enclosure does not show the sign
    pattern that hyperbolicity requires, so the sections or frames are
    unsound for this parameter box.
    """
    kind = "integration"


class ConeConditionFailure(ProofFailure):
    """A leading minor of the symmetrized Jacobian is not positive."""
    kind = "cones"

    def __init__(self, message, minor=None, value=None):
        ProofFailure.__init__(self, message, minor=minor, value=value)
        self.minor, self.value = minor, value

    def report(self):
        text = ProofFailure.report(self)
        if self.minor is not None:
            text += " [minor " + str(self.minor) + " = " + str(self.value) + "]"
        return text
