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

import collections
import logging
from .intervals import (interval, ivector, hull, upper, midpoint, is_positive,
                        is_negative, certainly_less, certainly_greater)
from .vector_field import fitzhugh_nagumo
from .frames import coordinate_change
from .segments import IsolatingSegment, SegmentChain, isolating_block
from .poincare import PoincareMap, MidPoincareMap
from .cones import UnstableManifoldConeBlock
from .numerics import (correct_corners, correct_homoclinic_corners,
                       corrector)
from .config import ProofConfig
from .errors import (ProofFailure, GeometryPrecondition, CoveringFailure,
                     IntegrationInconsistency)


__all__ = ["ProofResult", "verify_periodic_orbit", "verify_homoclinic_orbit",
           "prove_periodic_orbit", "prove_homoclinic_orbit", "sweep"]

logger = logging.getLogger(__name__)


ProofResult = collections.namedtuple('ProofResult',
                                     'verified, kind, message, details')


def _symmetric(radius):
    return interval(radius) * interval(-1, 1)


def _box(radii):
    return ivector([_symmetric(r) for r in radii])


def _shift(gamma, dv):
    return ivector(gamma) + ivector([0, 0, dv])


def _flow_options(config):
    return dict(order=config.order, step=config.step,
                min_step=config.min_step, max_time=config.max_time,
                max_steps=config.max_steps)


def _check_corner_order(ul, dl, ur, dr):
    if not (certainly_greater(ul[0], dl[0]) and certainly_greater(ur[0], dr[0])
            and certainly_greater(ur[2], ul[2])
            and certainly_greater(dr[2], dl[2])):
        raise GeometryPrecondition(
            "corner points are misordered: UL=" + str(midpoint(ul))
            + " DL=" + str(midpoint(dl)) + " UR=" + str(midpoint(ur))
            + " DR=" + str(midpoint(dr)))


def _covered_face(name, pmap, source, stable_radius, margin):
    """
    Maps an h-set and its unstable edges and returns the face and the slow
    range of the segment that the image covers.
    """
    edge_left = pmap.map(ivector([source[0], source[1].a]))
    edge_right = pmap.map(ivector([source[0], source[1].b]))
    if certainly_greater(edge_left[1], edge_right[1]):
        #the map reverses the orientation of the unstable direction
        edge_left, edge_right = edge_right, edge_left
    whole = pmap.map(source)
    logger.info("%s map: edges %s, %s; image %s", name, edge_left, edge_right,
                whole)
    if not (is_negative(edge_left[1] + margin)
            and is_positive(edge_right[1] - margin)
            and is_negative(whole[0].a) and is_positive(whole[0].b)):
        raise CoveringFailure(name + " Poincare map covering error: edges "
                              + str(edge_left[1]) + ", " + str(edge_right[1])
                              + ", slow image " + str(whole[0]),
                              edges=(edge_left, edge_right), image=whole)
    face = ivector([_symmetric(stable_radius),
                    interval((edge_left[1] + margin).b,
                             (edge_right[1] - margin).a), 0])
    slow = interval((whole[0].a - margin).a, (whole[0].b + margin).b)
    return face, slow, whole


def _segment(field, gamma, slow, P, face, subdivisions, name, correct=None):
    left, right = _shift(gamma, slow.a), _shift(gamma, slow.b)
    if correct is not None:
        left, right = correct(left), correct(right)
    return IsolatingSegment(field, left, right, P, face, face, subdivisions,
                            name=name)


def _verify(segment, recorder, details):
    hulls = segment.verify()
    logger.info("%s isolated: %s", segment.name, hulls)
    details[segment.name] = hulls
    if recorder is not None:
        recorder.log(segment.name, segment.enclosure)
    return hulls


def _verify_chain(chain, count, recorder, details):
    if recorder is None:
        hulls = chain.verify(count)
    else:
        hulls = None
        for i, link in chain.links(count):
            recorder.log(chain.name, link.enclosure)
            link.name = chain.name + " link " + str(i)
            products = link.verify()
            hulls = products if hulls is None else hull(hulls, products)
    logger.info("%s isolated over %d links: %s", chain.name, count, hulls)
    details[chain.name] = hulls
    return hulls


def _check_side(segments, above):
    for segment in segments:
        enclosure = segment.enclosure
        holds = (certainly_greater(enclosure[0], enclosure[2]) if above
                 else certainly_less(enclosure[0], enclosure[2]))
        if not holds:
            raise GeometryPrecondition(
                "misalignment of " + segment.name + ": it is not "
                + ("above" if above else "below") + " the plane u = v",
                enclosure=enclosure)


def verify_periodic_orbit(theta, eps, config=None, recorder=None):
    """
    Runs the proof that the FitzHugh-Nagumo equations with wave speed in
    `theta` and singular parameter in `eps` have a periodic orbit (a
    travelling wave train) near the singular relaxation cycle.

    The cycle is covered by four corner segments (UL, DL, UR, DR), two
    chains of segments along the slow manifolds and two Poincare maps for
    the fast jumps. Each step raises a ProofFailure subclass if its check
    fails; if the function returns, the orbit exists. Returns a dict of the
    hulls computed along the way.

    Usage: details = verify_periodic_orbit('0.61', interval(0, 1e-8))
    """
    config = config or ProofConfig.defaults()
    margin = interval(config.eps_margin)
    options = _flow_options(config)
    field = fitzhugh_nagumo(theta, eps)
    details = {}

    corners = (config.gamma_ul, config.gamma_dl, config.gamma_ur, config.gamma_dr)
    if config.correct_corners:
        corners = correct_corners(midpoint(interval(theta)), *corners,
                                  accuracy=config.accuracy)
    ul, dl, ur, dr = (ivector(gamma) for gamma in corners)
    _check_corner_order(ul, dl, ur, dr)
    logger.info("corners UL=%s DL=%s UR=%s DR=%s", midpoint(ul), midpoint(dl),
                midpoint(ur), midpoint(dr))
    PUL, PDL, PUR, PDR = (coordinate_change(field, gamma)
                          for gamma in (ul, dl, ur, dr))

    ru_dl, rs_ul = interval(config.ru_dl), interval(config.rs_ul)
    ru_ur, rs_dr = interval(config.ru_ur), interval(config.rs_dr)
    set_dl, set_ur = _box(config.set_dl), _box(config.set_ur)

    #fast jumps
    if config.mid_section:
        back_ul, back_dr = _box(config.back_set_ul), _box(config.back_set_dr)
        left_map = MidPoincareMap(field, PDL, PUL, dl, ul, ru_dl, rs_ul, -1,
                                  config.map_div, config.mid_weight, margin,
                                  **options)
        if not left_map.check_covering(set_dl, back_ul):
            raise CoveringFailure("left mid-section covering error")
        right_map = MidPoincareMap(field, PUR, PDR, ur, dr, ru_ur, rs_dr, 1,
                                   config.map_div, config.mid_weight, margin,
                                   **options)
        if not right_map.check_covering(set_ur, back_dr):
            raise CoveringFailure("right mid-section covering error")
        ul_face = ivector([_symmetric(rs_ul), back_ul[1], 0])
        dr_face = ivector([_symmetric(rs_dr), back_dr[1], 0])
        ul_slow, dr_slow = back_ul[0], back_dr[0]
    else:
        left_map = PoincareMap(field, PDL, PUL, dl, ul, ru_dl, rs_ul, -1,
                               config.map_div, **options)
        ul_face, ul_slow, details["left map"] = _covered_face(
            "left", left_map, set_dl, rs_ul, margin)
        right_map = PoincareMap(field, PUR, PDR, ur, dr, ru_ur, rs_dr, 1,
                                config.map_div, **options)
        dr_face, dr_slow, details["right map"] = _covered_face(
            "right", right_map, set_ur, rs_dr, margin)

    #corner segments
    dl_face = ivector([set_dl[0], _symmetric(ru_dl), 0])
    ur_face = ivector([set_ur[0], _symmetric(ru_ur), 0])
    ul_segment = _segment(field, ul, ul_slow, PUL, ul_face, config.corner_div,
                          "UL segment")
    dl_segment = _segment(field, dl, set_dl[1], PDL, dl_face, config.corner_div,
                          "DL segment")
    ur_segment = _segment(field, ur, set_ur[1], PUR, ur_face, config.corner_div,
                          "UR segment")
    dr_segment = _segment(field, dr, dr_slow, PDR, dr_face, config.corner_div,
                          "DR segment")
    for segment in (ul_segment, dl_segment, ur_segment, dr_segment):
        _verify(segment, recorder, details)

    UL, DL = ul_segment.enclosure, dl_segment.enclosure
    UR, DR = ur_segment.enclosure, dr_segment.enclosure
    if not (certainly_greater(UR[0], DR[0]) and certainly_greater(UL[0], DL[0])
            and certainly_greater(UR[2], UL[2])
            and certainly_greater(DR[2], DL[2])):
        raise GeometryPrecondition("corner segments alignment error",
                                   UL=UL, DL=DL, UR=UR, DR=DR)

    #slow manifolds
    correct = corrector(field, config.accuracy)
    up = SegmentChain(field, ul_segment.gamma_right, ur_segment.gamma_left,
                      PUL, PUR, ul_face, ur_face, config.chain_div,
                      correct=correct, link_factor=config.link_factor,
                      name="upper chain")
    down = SegmentChain(field, dl_segment.gamma_right, dr_segment.gamma_left,
                        PDL, PDR, dl_face, dr_face, config.chain_div,
                        correct=correct, link_factor=config.link_factor,
                        name="lower chain")
    _check_side((ul_segment, up, ur_segment), above=True)
    _check_side((dl_segment, down, dr_segment), above=False)
    _verify_chain(up, config.chain_links, recorder, details)
    _verify_chain(down, config.chain_links, recorder, details)
    return details


def verify_homoclinic_orbit(theta, eps, config=None, recorder=None):
    """
    Runs the proof that for some wave speed within config.theta_width of
    `theta` the FitzHugh-Nagumo equations have a homoclinic orbit to the
    origin (a travelling pulse), for every singular parameter in `eps`.

    The left jump starts on the unstable manifold of the origin and is
    checked with MidPoincareMap.shoot_with_theta over the whole theta range;
    the right jump is a plain mid-section covering. Blocks around the
    origin replace the DL corner segment. With config.use_cones the block
    carrying the unstable manifold is also checked with cone conditions.
    Raises a ProofFailure subclass on the first failed check and returns a
    dict of hulls otherwise.

    Usage: details = verify_homoclinic_orbit('0.61', interval(0, 1e-8))
    """
    config = config or ProofConfig.defaults()
    margin = interval(config.eps_margin)
    options = _flow_options(config)
    details = {}

    corners = (config.hom_gamma_ul, config.hom_gamma_dl, config.hom_gamma_ur,
               config.hom_gamma_dr)
    if config.correct_corners:
        corners = correct_homoclinic_corners(midpoint(interval(theta)),
                                             *corners, accuracy=config.accuracy)
    ul, dl, ur, dr = (ivector(gamma) for gamma in corners)
    #the origin is an equilibrium and the upper left corner lies at v = 0
    dl = ivector([0, 0, 0])
    ul[2] = interval(0)
    _check_corner_order(ul, dl, ur, dr)

    thetas = interval(theta) + _symmetric(config.theta_width)
    field = fitzhugh_nagumo(thetas, eps)
    logger.info("shooting over theta in %s", thetas)
    PUL, PDL, PUR, PDR = (coordinate_change(field, gamma)
                          for gamma in (ul, dl, ur, dr))
    correct = corrector(field, config.accuracy)

    ru_dl, rs_ul = interval(config.hom_ru_dl), interval(config.hom_rs_ul)
    ru_ur, rs_dr = interval(config.hom_ru_ur), interval(config.hom_rs_dr)
    set_dl, set_ur = _box(config.hom_set_dl), _box(config.hom_set_ur)
    back_ul, back_dr = _box(config.hom_back_set_ul), _box(config.hom_back_set_dr)
    s_man_rs, s_man_ru, s_man_v = (interval(r) for r in config.s_man_dl)

    #right side
    ur_face = ivector([set_ur[0], _symmetric(ru_ur), 0])
    dr_face = ivector([_symmetric(rs_dr), back_dr[1], 0])
    ur_segment = _segment(field, ur, set_ur[1], PUR, ur_face,
                          config.hom_corner_div, "UR segment", correct)
    dr_segment = _segment(field, dr, back_dr[0], PDR, dr_face,
                          config.hom_corner_div, "DR segment", correct)
    right_map = MidPoincareMap(field, PUR, PDR, ur, dr, ru_ur, rs_dr, 1,
                               config.hom_map_div, config.hom_mid_weight,
                               margin, **options)
    if not right_map.check_covering(set_ur, back_dr):
        raise CoveringFailure("right mid-section covering error")
    _verify(ur_segment, recorder, details)
    _verify(dr_segment, recorder, details)

    #left side
    ul_face = ivector([_symmetric(rs_ul), back_ul[1], 0])
    unstable_face = ivector([set_dl[0], _symmetric(ru_dl), 0])
    stable_face = ivector([_symmetric(s_man_rs), _symmetric(s_man_ru), 0])
    ul_segment = _segment(field, ul, back_ul[0], PUL, ul_face,
                          config.hom_corner_div, "UL segment", correct)
    unstable_block = isolating_block(
        field, correct(_shift(dl, set_dl[1].a)), correct(_shift(dl, set_dl[1].b)),
        PDL, unstable_face, unstable_face, config.hom_corner_div,
        name="unstable manifold block")
    stable_block = isolating_block(
        field, correct(_shift(dl, -s_man_v)), correct(_shift(dl, s_man_v)),
        PDL, stable_face, stable_face, config.hom_corner_div,
        name="stable manifold block")
    left_map = MidPoincareMap(field, PDL, PUL, dl, ul, ru_dl, rs_ul, -1,
                              config.hom_map_div, config.hom_mid_weight,
                              margin, **options)
    if not left_map.shoot_with_theta(set_dl, back_ul):
        raise CoveringFailure("left mid-section shooting with theta failed")
    for segment in (ul_segment, unstable_block, stable_block):
        _verify(segment, recorder, details)

    if config.use_cones:
        cones = UnstableManifoldConeBlock(field, ru_dl, upper(set_dl[0]),
                                          upper(set_dl[1]), config.u_proportion)
        cones.verify()
        block = cones.as_block(config.hom_corner_div)
        block.name = "cone block"
        _verify(block, recorder, details)
        details["unstable manifold exit"] = cones.unstable_manifold_enclosure()

    #slow manifolds
    up = SegmentChain(field, ul_segment.gamma_right, ur_segment.gamma_left,
                      PUL, PUR, ul_face, ur_face, config.hom_chain_div,
                      correct=correct, link_factor=config.link_factor,
                      name="upper chain")
    down = SegmentChain(field, stable_block.gamma_right, dr_segment.gamma_left,
                        PDL, PDR, stable_face, dr_face, config.hom_chain_div,
                        correct=correct, link_factor=config.link_factor,
                        name="lower chain")
    _check_side((ul_segment,), above=True)
    _check_side((dr_segment,), above=False)
    _verify_chain(up, config.hom_links_up, recorder, details)
    _verify_chain(down, config.hom_links_down, recorder, details)
    return details


def _attempt(verify, name, theta, eps, config, recorder):
    try:
        details = verify(theta, eps, config, recorder)
    except (ArithmeticError, ValueError) as error:
        #singular interval matrices, divisions by intervals containing 0 and
        #empty intersections
        failure = IntegrationInconsistency("interval arithmetic failed: "
                                           + str(error))
        logger.info("%s not verified for theta=%s eps=%s: %s", name, theta,
                    eps, failure.report())
        return ProofResult(False, failure.kind, failure.report(),
                           failure.details)
    except ProofFailure as failure:
        logger.info("%s not verified for theta=%s eps=%s: %s", name, theta,
                    eps, failure.report())
        return ProofResult(False, failure.kind, failure.report(),
                           failure.details)
    message = ("existence of a " + name + " for theta=" + str(theta)
               + " and eps=" + str(eps) + " verified")
    logger.info(message)
    return ProofResult(True, "verified", message, details)


def prove_periodic_orbit(theta, eps, config=None, recorder=None):
    """
    Like verify_periodic_orbit, but never raises a ProofFailure: the outcome
    is a ProofResult(verified, kind, message, details) whose `kind` names
    the failed check ("geometry", "isolation", "covering", "integration",
    "cones") or is "verified".

    Usage: result = prove_periodic_orbit('0.61', interval(0, 1e-8))
    """
    return _attempt(verify_periodic_orbit, "periodic orbit", theta, eps,
                    config, recorder)


def prove_homoclinic_orbit(theta, eps, config=None, recorder=None):
    """
    Usage: result = prove_homoclinic_orbit('0.61', interval(0, 1e-8))
    """
    return _attempt(verify_homoclinic_orbit, "homoclinic orbit", theta, eps,
                    config, recorder)


def sweep(boxes, prove=prove_periodic_orbit, config=None):
    """
    Runs `prove` on each (theta, eps) pair of `boxes` in turn and yields
    ((theta, eps), result). A failed box does not stop the sweep.

    Usage: for box, result in sweep([('0.61', e) for e in split(eps, 10)]):
               print(box, result.verified)
    """
    for theta, eps in boxes:
        yield (theta, eps), prove(theta, eps, config)
