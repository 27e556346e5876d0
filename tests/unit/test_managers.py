"""
Unit tests for the key, network and container managers.
"""
import os
from ansible_lab.MANAGERS.container_manager import ContainerManager
from ansible_lab.MANAGERS.key_manager import KeyManager
from ansible_lab.MANAGERS.network_manager import NetworkManager


class TestKeyManager:
    """Tests for KeyManager."""

    def test_generates_once(self, lab_config, runner):
        """Test the keypair is only generated when missing."""
        keys = KeyManager(lab_config, runner)
        keys.ensure_keys_dir()
        assert keys.ensure_keypair() is True
        assert keys.ensure_keypair() is False
        assert len(runner.commands) == 1

    def test_shows_keygen_output(self, lab_config, runner, capsys):
        """Test ssh-keygen's own output reaches the console."""
        keys = KeyManager(lab_config, runner)
        keys.ensure_keys_dir()
        keys.ensure_keypair()
        assert "Your identification has been saved in" in capsys.readouterr().out

    def test_restores_missing_public_key(self, lab_config, runner, file_mode):
        """Test a lone private key gets its public key derived, not regenerated."""
        keys = KeyManager(lab_config, runner)
        keys.ensure_keys_dir()
        with open(lab_config.private_key_path, "w") as f:
            f.write("PRIVATE KEY\n")

        assert keys.ensure_keypair() is False
        assert runner.commands == [["ssh-keygen", "-y", "-f", lab_config.private_key_path]]
        assert keys.read_public_key() == "ssh-rsa AAAAB3Nza"
        assert file_mode(lab_config.public_key_path) == 0o644
        with open(lab_config.private_key_path) as f:
            assert f.read() == "PRIVATE KEY\n"

    def test_read_public_key(self, lab_config, runner):
        """Test the public key is read without trailing newline."""
        keys = KeyManager(lab_config, runner)
        keys.ensure_keys_dir()
        keys.ensure_keypair()
        assert keys.read_public_key() == "ssh-rsa AAAAB3Nza fake@docker"

    def test_keys_dir_mode_is_reset(self, lab_config, runner, file_mode):
        """Test an existing keys directory is restricted again."""
        os.makedirs(lab_config.keys_dir, mode=0o755)
        os.chmod(lab_config.keys_dir, 0o755)
        KeyManager(lab_config, runner).ensure_keys_dir()
        assert file_mode(lab_config.keys_dir) == 0o700

    def test_remove_keys_dir(self, lab_config, runner):
        """Test removal is guarded by existence."""
        keys = KeyManager(lab_config, runner)
        assert keys.remove_keys_dir() is False
        keys.ensure_keys_dir()
        assert keys.remove_keys_dir() is True
        assert not os.path.exists(lab_config.keys_dir)


class TestNetworkManager:
    """Tests for NetworkManager."""

    def test_ensure_creates_once(self, lab_config, runner):
        """Test the network is created only when absent."""
        net = NetworkManager(lab_config, runner)
        assert net.ensure() is True
        assert net.ensure() is False
        assert runner.count("network", "create") == 1

    def test_exact_name_match(self, lab_config, runner):
        """Test a network with a longer name does not count."""
        runner.networks = ["ansible_network_old", "bridge"]
        assert NetworkManager(lab_config, runner).exists() is False

    def test_remove(self, lab_config, runner):
        """Test removal only when present."""
        net = NetworkManager(lab_config, runner)
        assert net.remove() is False
        net.ensure()
        assert net.remove() is True
        assert runner.networks == []

    def test_uses_configured_runtime(self, lab_config, runner):
        """Test the runtime binary comes from the configuration."""
        lab_config.runtime = "podman"
        NetworkManager(lab_config, runner).ensure()
        assert all(c[0] == "podman" for c in runner.commands)


class TestContainerManager:
    """Tests for ContainerManager."""

    def test_exists_exact_match(self, lab_config, runner):
        """Test name lookup is exact."""
        runner.containers = ["ansible_node_12"]
        mgr = ContainerManager(lab_config, runner)
        assert mgr.exists("ansible_node_1") is False
        assert mgr.exists("ansible_node_12") is True

    def test_ip_address(self, lab_config, runner):
        """Test the IP address is read from inspect output."""
        mgr = ContainerManager(lab_config, runner)
        mgr.run("ansible_node_1")
        assert mgr.ip_address("ansible_node_1") == "172.18.0.2"
        inspect = runner.commands[-1]
        assert inspect[:3] == ["docker", "inspect", "-f"]
        assert "{{.IPAddress}}" in inspect[3]

    def test_remove(self, lab_config, runner):
        """Test force removal only when present."""
        mgr = ContainerManager(lab_config, runner)
        assert mgr.remove("ansible_node_1") is False
        mgr.run("ansible_node_1")
        assert mgr.remove("ansible_node_1") is True
        assert ["docker", "rm", "-f", "ansible_node_1"] in runner.commands
