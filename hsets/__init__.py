"""
    hsets is a toolbox for computer-assisted proofs of travelling waves in the
    FitzHugh-Nagumo equations

        u' = w
        w' = c*(theta*w + u*(u - 1)*(u - a) + v)
        v' = (eps/theta)*(u - v)

    for a singular parameter eps in a small interval [0, eps0]. A wave train
    is a periodic orbit of this system near the singular relaxation cycle, a
    pulse is an orbit homoclinic to the origin. The proofs combine isolating
    segments along the slow manifolds with covering relations across the fast
    jumps, all evaluated in interval arithmetic (mpmath.iv), so a verified
    proof holds for every eps in the box at once.

    Intervals are represented as mpmath intervals and vectors or matrices of
    them as numpy object arrays. Parameters given as decimal strings are
    enclosed exactly. Floating point arithmetic only produces guesses: corner
    points, frames, section placement. Bad guesses never invalidate a proof;
    they make a check fail.

    **Exposed Classes and Functions**

    Interval helpers. These work on single intervals and entrywise on arrays.

        interval, ivector, imatrix - Build intervals and interval arrays
        hull, intersection, split - Set operations on boxes
        is_covering - Checks a covering relation between two 2-D h-sets

    The system and its integration.

        VectorField - An immutable vector field with float and interval
                      evaluation, Jacobians and Taylor series
        fitzhugh_nagumo - The travelling wave equations above
        fast_subsystem - The planar fast subsystem at a fixed slow value
        Series, taylor_coefficients - Taylor series arithmetic for ODEs
        RigorousFlow - A validated Taylor integrator with Poincare maps
        C0Set, AffineSection - Sets and sections RigorousFlow works with

    Building blocks of a proof.

        coordinate_change - A local frame from the eigenvectors at a point
        IsolatingSegment - An h-set swept along the slow manifold
        isolating_block - A segment around an equilibrium
        SegmentChain - A long segment made of short links
        PoincareMap, MidPoincareMap - Coverings across the fast jumps
        ConeBlock, UnstableManifoldConeBlock - Cone conditions at the origin

    Running proofs.

        ProofConfig, load_config - All tunable constants
        prove_periodic_orbit - Proves a wave train for a parameter box
        prove_homoclinic_orbit - Proves a pulse for a wave speed range
        sweep - Runs a proof over many parameter boxes
        EnclosureRecorder - Collects enclosures and plots them

    Every failed check raises a subclass of ProofFailure (GeometryPrecondition,
    IsolationFailure, CoveringFailure, IntegrationInconsistency,
    ConeConditionFailure); the prove_* functions turn them into a
    ProofResult record.

    The numerics module holds the non-rigorous shooting that corrects corner
    guesses, and the cli module the hsets-proof command.
"""

from .intervals import *
from .errors import *
from .taylor import *
from .vector_field import *
from .frames import *
from .flow import *
from .segments import *
from .poincare import *
from .cones import *
from .numerics import *
from .config import *
from .proof import *
from .plotting import *
