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

import argparse
import logging
import sys
from .intervals import interval, split
from .config import ProofConfig, load_config
from .proof import prove_periodic_orbit, prove_homoclinic_orbit
from .numerics import approximate_theta
from .plotting import EnclosureRecorder


__all__ = ["main"]


def _parser():
    parser = argparse.ArgumentParser(
        prog="hsets-proof",
        description="Computer-assisted proofs of travelling waves in the "
                    "FitzHugh-Nagumo equations with isolating segments.")
    parser.add_argument("--theta", default="0.61",
                        help="wave speed, as a decimal string (default 0.61)")
    parser.add_argument("--eps-min", default="0",
                        help="lower bound of the singular parameter")
    parser.add_argument("--eps-max", default="1e-4",
                        help="upper bound of the singular parameter")
    parser.add_argument("--boxes", type=int, default=1,
                        help="number of pieces the eps range is split into")
    parser.add_argument("--homoclinic", action="store_true",
                        help="prove a pulse instead of a wave train")
    parser.add_argument("--shoot-theta", action="store_true",
                        help="refine the pulse wave speed before the proof")
    parser.add_argument("--config",
                        help="JSON file with configuration overrides")
    parser.add_argument("--plot", metavar="FILE",
                        help="save the verified enclosures to an image")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="log progress (twice for debug output)")
    return parser


def main(argv=None):
    """
    Runs one proof per eps box and prints a line for each. Returns 0 if
    every box was verified and 1 otherwise.

    Usage: hsets-proof --theta 0.61 --eps-max 1e-4 --boxes 4
           hsets-proof --homoclinic --shoot-theta -v
    """
    args = _parser().parse_args(argv)
    level = (logging.WARNING, logging.INFO, logging.DEBUG)[min(args.verbose, 2)]
    logging.basicConfig(level=level,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    config = ProofConfig.defaults()
    if args.config:
        config = load_config(args.config, config)
    theta = args.theta
    if args.homoclinic and args.shoot_theta:
        theta = repr(approximate_theta(float(theta), config.hom_gamma_ul,
                                       accuracy=config.accuracy))
    prove = prove_homoclinic_orbit if args.homoclinic else prove_periodic_orbit
    recorder = EnclosureRecorder() if args.plot else None

    eps = interval(args.eps_min, args.eps_max)
    failures = 0
    for piece in split(eps, args.boxes):
        result = prove(theta, piece, config, recorder)
        status = "verified" if result.verified else "FAILED (" + result.kind + ")"
        print("theta=" + str(theta) + " eps=" + str(piece) + ": " + status)
        if not result.verified:
            print("    " + result.message)
            failures += 1
    if recorder is not None:
        recorder.phase_portrait(filename=args.plot)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
