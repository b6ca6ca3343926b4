from hsets import (ProofFailure, GeometryPrecondition, IsolationFailure,
                   CoveringFailure, IntegrationInconsistency,
                   ConeConditionFailure, interval)


class TestReports:
    def test_kinds(self):
        kinds = [cls.kind for cls in (GeometryPrecondition, IsolationFailure,
                                      CoveringFailure, IntegrationInconsistency,
                                      ConeConditionFailure)]
        assert kinds == ["geometry", "isolation", "covering", "integration",
                         "cones"]
        assert all(issubclass(cls, ProofFailure)
                   for cls in (GeometryPrecondition, ConeConditionFailure))

    def test_isolation_report(self):
        failure = IsolationFailure("isolation error", face="UL", link=3,
                                   hull=interval(-1, 1))
        report = failure.report()
        assert report.startswith("isolation: isolation error")
        assert "face UL, link 3" in report

    def test_covering_report(self):
        report = CoveringFailure("no covering", link=4).report()
        assert report.startswith("covering: no covering")
        assert "4" in report

    def test_plain_report(self):
        assert GeometryPrecondition("misordered").report() == "geometry: misordered"

    def test_details_hold_the_enclosures(self):
        speed = interval(-1, 1)
        failure = IntegrationInconsistency("not transversal", speed=speed)
        assert failure.details == {"speed": speed}
        failure = IsolationFailure("isolation error", face="SR",
                                   hull=interval(-1, 1))
        assert failure.details["face"] == "SR"
        assert failure.details["hull"] is failure.hull
        assert GeometryPrecondition("misordered").details == {}
