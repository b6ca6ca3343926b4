import json
import os
import pytest
import hsets.proof
from hsets import (prove_periodic_orbit, prove_homoclinic_orbit, sweep,
                   verify_periodic_orbit, ProofConfig, ProofResult,
                   EnclosureRecorder, GeometryPrecondition, IsolationFailure,
                   IsolatingSegment, PoincareMap, fitzhugh_nagumo,
                   coordinate_change, correct_corners, interval, ivector,
                   imatrix, identity, lower, upper, midpoint, width,
                   contains_zero, split)
from hsets.cli import main


slow = pytest.mark.skipif(not os.environ.get("HSETS_SLOW"),
                          reason="set HSETS_SLOW=1 to run full proofs")


@pytest.fixture
def swapped():
    """Configuration whose left corners are exchanged."""
    config = ProofConfig.defaults()
    return config._replace(gamma_ul=config.gamma_dl, gamma_dl=config.gamma_ul,
                           correct_corners=False)


class TestResults:
    def test_misordered_corners_raise(self, swapped):
        with pytest.raises(GeometryPrecondition):
            verify_periodic_orbit('0.61', interval(0, 1e-8), swapped)

    def test_failures_become_results(self, swapped):
        result = prove_periodic_orbit('0.61', interval(0, 1e-8), swapped)
        assert isinstance(result, ProofResult)
        assert not result.verified
        assert result.kind == "geometry"
        assert "misordered" in result.message

    def test_homoclinic_failure(self):
        config = ProofConfig.defaults()._replace(
            hom_gamma_ur=(-1.0, 0.0, 0.12), correct_corners=False)
        result = prove_homoclinic_orbit('0.61', interval(0, 1e-8), config)
        assert not result.verified and result.kind == "geometry"

    def test_arithmetic_errors_are_integration_failures(self, monkeypatch):
        def singular(theta, eps, config, recorder):
            raise ZeroDivisionError("pivot contains zero")
        monkeypatch.setattr(hsets.proof, "verify_periodic_orbit", singular)
        result = prove_periodic_orbit('0.61', interval(0, 1e-8))
        assert result.kind == "integration"
        assert "pivot contains zero" in result.message

    def test_undecided_comparisons_are_integration_failures(self, monkeypatch):
        def undecided(theta, eps, config, recorder):
            raise ValueError("overlapping intervals")
        monkeypatch.setattr(hsets.proof, "verify_periodic_orbit", undecided)
        result = prove_periodic_orbit('0.61', interval(0, 1e-8))
        assert not result.verified and result.kind == "integration"
        assert "overlapping intervals" in result.message

    def test_failure_details_are_kept(self, monkeypatch):
        hull = interval(-1, 1)

        def isolation(theta, eps, config, recorder):
            raise IsolationFailure("isolation error", face="UR", hull=hull)
        monkeypatch.setattr(hsets.proof, "verify_periodic_orbit", isolation)
        result = prove_periodic_orbit('0.61', interval(0, 1e-8))
        assert result.kind == "isolation"
        assert result.details["face"] == "UR"
        assert result.details["hull"] is hull

    def test_success(self, monkeypatch):
        def verified(theta, eps, config, recorder):
            return {"UL segment": None}
        monkeypatch.setattr(hsets.proof, "verify_periodic_orbit", verified)
        result = prove_periodic_orbit('0.61', interval(0, 1e-8))
        assert result.verified and result.kind == "verified"
        assert "UL segment" in result.details

    def test_sweep_continues_after_failures(self, swapped):
        boxes = [('0.61', eps) for eps in split(interval(0, 1e-4), 3)]
        results = list(sweep(boxes, config=swapped))
        assert len(results) == 3
        assert [box for box, result in results] == boxes
        assert not any(result.verified for box, result in results)


class TestCommandLine:
    def test_failed_boxes(self, tmp_path, capsys):
        config = ProofConfig.defaults()
        path = tmp_path / "swapped.json"
        path.write_text(json.dumps({"gamma_ul": config.gamma_dl,
                                    "gamma_dl": config.gamma_ul,
                                    "correct_corners": False}))
        assert main(["--config", str(path), "--boxes", "2"]) == 1
        output = capsys.readouterr().out
        assert output.count("FAILED (geometry)") == 2


def _within(fine, coarse, tolerance=1e-12):
    return (all(lower(fine) >= lower(coarse) - tolerance)
            and all(upper(fine) <= upper(coarse) + tolerance))


class TestSubdivisionRefinement:
    def test_finer_segment_hulls_are_nested(self, saddle):
        #a slightly rotated frame, so that the face products overestimate
        P = imatrix([[1, '0.1', 0], ['-0.1', 1, 0], [0, 0, 1]])
        face = ivector([interval('-0.1', '0.1'), interval('-0.1', '0.1'), 0])
        coarse = IsolatingSegment(saddle, [0, 0, 0], [0, 0, 1], P, face, face, 2)
        fine = IsolatingSegment(saddle, [0, 0, 0], [0, 0, 1], P, face, face, 4)
        coarse_hulls = coarse.verify()
        fine_hulls = fine.verify()
        assert _within(fine_hulls, coarse_hulls)
        assert sum(width(fine_hulls)) <= sum(width(coarse_hulls)) + 1e-12

    def test_finer_poincare_images_are_nested(self, drift):
        face = ivector([interval('-0.1', '0.1'), interval(0, '0.2')])
        images = []
        for subdivisions in (1, 2):
            pm = PoincareMap(drift, identity(3), identity(3), [0, 0, 0],
                             [1, 0, 0], '0.5', '0.25', 1, subdivisions)
            images.append(pm.map(face))
        coarse, fine = images
        assert _within(fine, coarse)
        assert lower(fine[0]) <= 0 and upper(fine[0]) >= 0.2
        assert lower(fine[1]) <= -0.5 <= upper(fine[1])


class TestFastJump:
    def test_left_jump_lands_near_the_upper_corner(self):
        config = ProofConfig.defaults()
        field = fitzhugh_nagumo('0.61', 0)
        ul, dl, ur, dr = correct_corners(0.61, config.gamma_ul, config.gamma_dl,
                                         config.gamma_ur, config.gamma_dr)
        dl, ul = ivector(dl), ivector(ul)
        PDL, PUL = coordinate_change(field, dl), coordinate_change(field, ul)
        pm = PoincareMap(field, PDL, PUL, dl, ul, config.ru_dl, config.rs_ul,
                         -1, 1, order=config.order, step=config.step)
        image = pm.map(ivector([interval('-1e-6', '1e-6'), 0]))
        #eps = 0 freezes the slow variable
        assert contains_zero(image[0])
        assert width(image[0]) < 1e-6
        assert width(image[1]) < 1e-2
        assert abs(midpoint(image[1])) < 0.1


@slow
class TestFullProofs:
    def test_periodic_orbit(self):
        recorder = EnclosureRecorder()
        result = prove_periodic_orbit('0.61', interval(0, 1e-8),
                                      recorder=recorder)
        assert result.verified, result.message
        assert "upper chain" in recorder.boxes

    def test_homoclinic_orbit(self):
        result = prove_homoclinic_orbit('0.61', interval(0, 1e-8))
        assert result.verified, result.message
