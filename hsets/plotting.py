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

import matplotlib.pyplot as plt
import matplotlib.patches
from .intervals import ivector, lower, upper


__all__ = ["EnclosureRecorder"]

_NAMES = ("u", "w", "v")


class EnclosureRecorder(object):
    """
    Records interval enclosures produced during a proof and plots them.

    Call `log` with a label and an interval vector (a segment enclosure, a
    cell of a chain, a section crossing) whenever there is something worth
    drawing. Boxes logged under the same label share a color.

    After the proof, call `phase_portrait` with two coordinate indices to
    draw every box projected onto those coordinates. Calling `clear` deletes
    all boxes but keeps the recorder usable.
    """
    def __init__(self):
        """
        Usage: record = EnclosureRecorder()
               result = prove_periodic_orbit(theta, eps, recorder=record)
        """
        self.boxes = {}

    def log(self, label, box):
        """
        Stores a copy of the box under `label`.

        Usage: record.log("UL segment", segment.enclosure)
        """
        self.boxes.setdefault(label, []).append(ivector(box))

    def clear(self):
        """
        Usage: record.clear()
        """
        self.boxes = {}

    def phase_portrait(self, xaxis=0, yaxis=2, filename=None):
        """
        Draws all recorded boxes projected onto coordinates `xaxis` and
        `yaxis` (by default u and v, where the relaxation cycle looks like a
        parallelogram). The figure is saved to `filename` if one is given
        and shown otherwise. Returns the figure.

        Usage: record.phase_portrait()
               record.phase_portrait(0, 1, filename="segments.png")
        """
        figure = plt.figure()
        axes = figure.add_subplot(111)
        cycle = plt.rcParams['axes.prop_cycle'].by_key()['color']
        for i, (label, boxes) in enumerate(sorted(self.boxes.items())):
            color = cycle[i % len(cycle)]
            for k, box in enumerate(boxes):
                x0, y0 = lower(box[xaxis]), lower(box[yaxis])
                patch = matplotlib.patches.Rectangle(
                    (x0, y0), upper(box[xaxis]) - x0, upper(box[yaxis]) - y0,
                    fill=False, edgecolor=color,
                    label=label if k == 0 else None)
                axes.add_patch(patch)
        axes.autoscale_view()
        axes.set_xlabel(_NAMES[xaxis] if xaxis < len(_NAMES) else str(xaxis))
        axes.set_ylabel(_NAMES[yaxis] if yaxis < len(_NAMES) else str(yaxis))
        if self.boxes:
            axes.legend()
        if filename is None:
            plt.show()
        else:
            figure.savefig(filename)
        return figure
