import matplotlib.pyplot as plt
from hsets import EnclosureRecorder, interval, ivector


class TestEnclosureRecorder:
    def test_log_and_clear(self):
        record = EnclosureRecorder()
        record.log("segment", ivector([interval(0, 1), 0, interval(0, 2)]))
        record.log("segment", ivector([interval(1, 2), 0, interval(0, 2)]))
        assert len(record.boxes["segment"]) == 2
        record.clear()
        assert record.boxes == {}

    def test_phase_portrait(self, tmp_path):
        record = EnclosureRecorder()
        record.log("UL segment", ivector([interval(0, 1), 0, interval(0, 2)]))
        record.log("chain", ivector([interval(1, 2), 0, interval(2, 3)]))
        filename = tmp_path / "portrait.png"
        figure = record.phase_portrait(filename=str(filename))
        assert filename.exists()
        axes = figure.axes[0]
        assert len(axes.patches) == 2
        assert axes.get_xlabel() == "u" and axes.get_ylabel() == "v"
        plt.close(figure)
