import json
import pytest
from hsets import ProofConfig, load_config


class TestProofConfig:
    def test_defaults(self):
        config = ProofConfig.defaults()
        assert config.order == 6
        assert config.eps_margin == '1e-15'
        assert len(config.gamma_ul) == 3
        assert config.gamma_ul[0] > config.gamma_dl[0]

    def test_replace(self):
        config = ProofConfig.defaults()._replace(corner_div=10)
        assert config.corner_div == 10
        assert ProofConfig.defaults().corner_div == 200


class TestLoadConfig:
    def test_overrides(self, tmp_path):
        path = tmp_path / "box.json"
        path.write_text(json.dumps({"chain_links": 5,
                                    "set_dl": ["2e-3", "1e-3"]}))
        config = load_config(str(path))
        assert config.chain_links == 5
        assert config.set_dl == ("2e-3", "1e-3")
        assert config.corner_div == 200

    def test_overrides_apply_to_a_base(self, tmp_path):
        path = tmp_path / "box.json"
        path.write_text(json.dumps({"chain_links": 5}))
        base = ProofConfig.defaults()._replace(corner_div=3)
        assert load_config(str(path), base).corner_div == 3

    def test_unknown_keys(self, tmp_path):
        path = tmp_path / "box.json"
        path.write_text(json.dumps({"chain_lnks": 5}))
        with pytest.raises(ValueError) as error:
            load_config(str(path))
        assert "chain_lnks" in str(error.value)
