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

import logging
from .intervals import (interval, ivector, imatrix, inverse, midpoint,
                        mid_vector, mid_matrix, is_positive, leading_minors)
from .frames import coordinate_change
from .segments import isolating_block
from .errors import ConeConditionFailure


__all__ = ["ConeBlock", "UnstableManifoldConeBlock"]

logger = logging.getLogger(__name__)

_Q1 = imatrix([[-1, 0, 0], [0, 1, 0], [0, 0, -1]])


class ConeBlock(object):
    """
    An isolating block around the equilibrium at the origin of the
    FitzHugh-Nagumo field, with cone conditions.

    Block coordinates are given by `inverse_basis`: its columns are the
    stable and unstable eigenvectors at the origin, scaled by `delta_s` and
    `delta_u`, and the tangent (-1/a, 0, 1) of the slow manifold, scaled by
    `delta_mu`. The block is the image of the cube [-1, 1]^3. `basis` is the
    (rounded) inverse change of coordinates. Both keep the slow coordinate
    separate from the fast ones.

    The cone conditions hold when the symmetric part of the quadratic form
    Q*DF, with Q = diag(-1, 1, -1/eps) in block coordinates, is positive
    definite on the whole block. The slow row of Q*DF does not depend on
    eps once it is divided by eps, so it is taken from the field with eps
    set to 1 and the check covers eps = 0 as well.

    Usage: block = ConeBlock(field, delta_u, delta_s, delta_mu)
           block.verify()
    """
    def __init__(self, field, delta_u, delta_s, delta_mu):
        self.field = field
        self.delta_u, self.delta_s = interval(delta_u), interval(delta_s)
        self.delta_mu = interval(delta_mu)
        self.eps_one = field.with_parameters(eps=1)
        a = interval(field.parameters.a)

        P = coordinate_change(field, [0, 0, 0])
        P[0, 2] = -1 / a
        P[1, 2] = interval(0)
        P[2, 2] = interval(1)
        P = midpoint(P)
        P[2, 0] = P[2, 1] = 0.0
        scales = imatrix([[self.delta_s, 0, 0], [0, self.delta_u, 0],
                          [0, 0, self.delta_mu]])
        self.basis = mid_matrix(inverse(imatrix(P).dot(scales)))
        self.inverse_basis = inverse(self.basis)
        for M in (self.basis, self.inverse_basis):
            M[2, 0] = M[2, 1] = interval(0)

    def field_in_block_coordinates(self, y):
        """
        Encloses the field at inverse_basis*y in block coordinates, over the
        box y, with the mean value form around the middle of y. The block
        Jacobian is formed before it is applied to y.
        """
        y = ivector(y)
        middle = mid_vector(y)
        at_middle = self.basis.dot(self.field(self.inverse_basis.dot(middle)))
        derivative = self.basis.dot(
            self.field.jacobian(self.inverse_basis.dot(y))).dot(self.inverse_basis)
        return at_middle + derivative.dot(y - middle)

    def q_eps_df(self, x):
        y = self.inverse_basis.dot(ivector(x))
        result = _Q1.dot(self.basis).dot(self.field.jacobian(y)).dot(self.inverse_basis)
        slow = self.basis.dot(self.eps_one.jacobian(y)).dot(self.inverse_basis)
        result[2, :] = -slow[2, :]
        return result

    def symmetrized(self, box=None):
        """Q*DF plus its transpose, over `box` (the whole block by default)."""
        if box is None:
            box = ivector([interval(-1, 1)] * 3)
        Q = self.q_eps_df(box)
        return Q.T + Q

    def verify(self):
        """
        Checks the three leading principal minors of the symmetrized form
        and raises ConeConditionFailure naming the first one that is not
        positive.
        """
        for k, minor in enumerate(leading_minors(self.symmetrized()), 1):
            logger.debug("leading minor %d: %s", k, minor)
            if not is_positive(minor):
                raise ConeConditionFailure(
                    "cone conditions fail at leading minor " + str(k),
                    minor=k, value=minor)
        return True

    def stable_manifold_frame(self):
        """
        The frame of the block seen as an isolating segment: the fast part
        of inverse_basis, rescaled to be close to the eigenvector frame.
        """
        P = self.inverse_basis.copy()
        P[2, 0] = P[2, 1] = P[0, 2] = P[1, 2] = interval(0)
        P[2, 2] = interval(1)
        scales = imatrix([[1 / self.delta_s, 0, 0], [0, 1 / self.delta_u, 0],
                          [0, 0, 1]])
        return P.dot(scales)

    def face(self):
        return ivector([self.delta_s * interval(-1, 1),
                        self.delta_u * interval(-1, 1), 0])

    def unstable_manifold_enclosure(self):
        """Encloses the exit of the unstable manifold through the block."""
        return self.inverse_basis.dot(ivector([interval(-1, 1), 1,
                                               interval(-1, 1)]))

    def as_block(self, subdivisions):
        """
        Returns the isolating segment with the same geometry, running along
        the slow manifold from inverse_basis*(0, 0, -1) to
        inverse_basis*(0, 0, 1).

        Usage: segment = block.as_block(150)
        """
        left = self.inverse_basis.dot(ivector([0, 0, -1]))
        right = self.inverse_basis.dot(ivector([0, 0, 1]))
        return isolating_block(self.field, left, right,
                               self.stable_manifold_frame(), self.face(),
                               self.face(), subdivisions)


class UnstableManifoldConeBlock(ConeBlock):
    """
    A cone block used to follow the unstable manifold of the equilibrium.
    The cone conditions are only verified on the shorter block whose
    unstable size is `u_proportion` times delta_u; on the rest of the block
    the unstable component of the field must be positive, so the manifold
    leaves through the face yu = 1.

    Usage: block = UnstableManifoldConeBlock(field, delta_u, delta_s,
                                             delta_mu, '0.3')
    """
    def __init__(self, field, delta_u, delta_s, delta_mu, u_proportion='0.3'):
        ConeBlock.__init__(self, field, delta_u, delta_s, delta_mu)
        self.u_proportion = interval(u_proportion)
        self.short_block = ConeBlock(field, self.u_proportion * self.delta_u,
                                     delta_s, delta_mu)
        self.short_block.verify()
        support = ivector([interval(-1, 1), interval(self.u_proportion.a, 1),
                           interval(-1, 1)])
        flow = self.field_in_block_coordinates(support)[1]
        if not is_positive(flow):
            raise ConeConditionFailure(
                "non-uniform flow in the unstable direction: " + str(flow),
                value=flow)

    def verify(self):
        return self.short_block.verify()
