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
import json


__all__ = ["ProofConfig", "load_config"]


_DEFAULTS = collections.OrderedDict([
    #safety margins; strings are enclosed exactly
    ("eps_margin", '1e-15'),
    ("link_factor", '1.1'),
    ("accuracy", 1e-12),

    #rigorous integration
    ("order", 6),
    ("step", 0.1),
    ("min_step", 1e-7),
    ("max_time", 400.0),
    ("max_steps", 200000),

    #periodic orbit: subdivisions
    ("map_div", 20),
    ("chain_links", 100),
    ("chain_div", 80),
    ("corner_div", 200),
    ("mid_section", False),
    ("mid_weight", 0.93),

    #periodic orbit: corner guesses (u, w, v)
    ("gamma_ul", (0.970345591417269, 0.0, 0.0250442158334208)),
    ("gamma_dl", (-0.108412947498862, 0.0, 0.0250442158334208)),
    ("gamma_ur", (0.841746280832201, 0.0, 0.0988076360184288)),
    ("gamma_dr", (-0.237012258083933, 0.0, 0.0988076360184288)),
    ("correct_corners", True),

    #periodic orbit: distances from the slow manifold and set sizes
    ("ru_dl", '0.011'),
    ("rs_ul", '0.01'),
    ("ru_ur", '0.0015'),
    ("rs_dr", '0.028'),
    ("set_dl", ('1e-3', '1e-3')),
    ("set_ur", ('1e-3', '1e-4')),
    ("back_set_ul", ('0.4e-3', '1e-3')),
    ("back_set_dr", ('1e-3', '1e-4')),

    #homoclinic orbit
    ("theta_width", '2.5e-3'),
    ("hom_map_div", 20),
    ("hom_links_up", 200),
    ("hom_links_down", 400),
    ("hom_chain_div", 110),
    ("hom_corner_div", 150),
    ("hom_mid_weight", 0.945),
    ("hom_gamma_ul", (0.970345591417269, 0.0, 0.0)),
    ("hom_gamma_dl", (0.0, 0.0, 0.0)),
    ("hom_gamma_ur", (1.0, 0.0, 0.12)),
    ("hom_gamma_dr", (-0.3, 0.0, 0.12)),
    ("s_man_dl", ('5e-4', '5e-4', '6e-4')),
    ("hom_ru_dl", '8e-5'),
    ("hom_set_dl", ('2e-5', '1e-5')),
    ("hom_ru_ur", '5e-3'),
    ("hom_set_ur", ('2e-3', '7e-4')),
    ("hom_rs_ul", '1.5e-3'),
    ("hom_back_set_ul", ('7e-4', '5e-4')),
    ("hom_rs_dr", '1e-2'),
    ("hom_back_set_dr", ('2e-3', '2e-3')),
    ("use_cones", True),
    ("u_proportion", '0.3'),
    ])


class ProofConfig(collections.namedtuple('ProofConfig', list(_DEFAULTS))):
    """
    All tunable constants of a proof: safety margins, subdivision counts,
    integrator settings, corner guesses and the sizes of the h-sets. Nothing
    here is derived automatically; the published values only apply to the
    FitzHugh-Nagumo parameter ranges they were tuned for. Sizes are decimal
    strings so that they are enclosed exactly.

    Usage: config = ProofConfig.defaults()
           config = ProofConfig.defaults()._replace(corner_div=50)
    """
    __slots__ = ()

    @classmethod
    def defaults(cls):
        return cls(**_DEFAULTS)


def load_config(path, base=None):
    """
    Reads a JSON object of overrides and applies them to `base` (or the
    defaults). Unknown keys raise a ValueError. Lists become tuples.

    Usage: config = load_config("box.json")
    """
    base = base or ProofConfig.defaults()
    with open(path) as f:
        data = json.load(f)
    unknown = set(data) - set(base._fields)
    if unknown:
        raise ValueError("unknown configuration keys: "
                         + ", ".join(sorted(unknown)))
    for key, value in data.items():
        if isinstance(value, list):
            data[key] = tuple(value)
    return base._replace(**data)
