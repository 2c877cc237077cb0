import unittest

from core.domain.models import ContainerConfig, ContainerInfo, HostConfig, State
from core.domain.virt import DomainStatus, VirtContainerInfo, VirtCpuInfo, VirtDomInfo
from core.services.schema_translator import (
    is_running,
    to_container,
    to_container_info,
    to_virt_config,
)


def _config(cmd, image="/path/x.qcow2"):
    return ContainerConfig(
        cmd=cmd,
        image=image,
        host_config=HostConfig(memory=2097152, cpu_quota=2, network_mode="br0"),
    )


class TestToVirtConfig(unittest.TestCase):
    def test_hd_boot_uses_disk_source(self):
        virt = to_virt_config(_config(["hd"]), "vm")

        self.assertEqual(virt.boot, "hd")
        self.assertEqual(virt.disk_source, "/path/x.qcow2")
        self.assertEqual(virt.cdrom_source, "")

    def test_cdrom_boot_uses_cdrom_source(self):
        virt = to_virt_config(_config(["cdrom"]), "vm")

        self.assertEqual(virt.boot, "cdrom")
        self.assertEqual(virt.cdrom_source, "/path/x.qcow2")
        self.assertEqual(virt.disk_source, "")

    def test_other_boot_tag_leaves_sources_empty(self):
        for cmd in (["network"], ["HD"], [], None):
            virt = to_virt_config(_config(cmd))
            self.assertEqual(virt.disk_source, "")
            self.assertEqual(virt.cdrom_source, "")

    def test_resources_come_from_host_config(self):
        config = _config(["hd", "--ignored"])
        virt = to_virt_config(config, "centos")

        self.assertEqual(virt.name, "centos")
        self.assertEqual(virt.memory, 2097152)
        self.assertEqual(virt.vcpu, 2)
        self.assertEqual(virt.bridge, "br0")
        self.assertIs(virt.container_config, config)

    def test_wire_keys(self):
        payload = to_virt_config(_config(["hd"]), "vm").model_dump(mode="json", by_alias=True)

        self.assertEqual(
            set(payload),
            {"name", "memory", "vcpu", "disk_source", "cdrom_source", "bridge", "boot", "ContainerConfig"},
        )
        self.assertEqual(payload["ContainerConfig"]["HostConfig"]["NetworkMode"], "br0")

    def test_unknown_generic_fields_round_trip(self):
        config = ContainerConfig.model_validate({"Cmd": ["hd"], "Image": "/x", "Tty": True})
        payload = to_virt_config(config).model_dump(mode="json", by_alias=True)

        self.assertTrue(payload["ContainerConfig"]["Tty"])


class TestRunningState(unittest.TestCase):
    def test_only_status_one_is_running(self):
        self.assertTrue(is_running(VirtContainerInfo(id="a", dom_info=VirtDomInfo(status=1))))
        for status in (0, 2, 3, 5, 7, 42, -1):
            info = VirtContainerInfo(id="a", dom_info=VirtDomInfo(status=status))
            self.assertFalse(is_running(info), status)

    def test_missing_dom_info_is_not_running(self):
        self.assertFalse(is_running(VirtContainerInfo(id="a")))

    def test_domain_status_enum(self):
        self.assertEqual(VirtDomInfo(status=5).domain_status, DomainStatus.SHUTOFF)
        self.assertIsNone(VirtDomInfo(status=42).domain_status)

    def test_null_status_is_not_running(self):
        virt = VirtContainerInfo.model_validate({"Id": "a", "Name": "vm", "DomInfo": {"status": None}})

        self.assertIsNone(virt.dom_info.status)
        self.assertIsNone(virt.dom_info.domain_status)
        self.assertFalse(is_running(virt))
        self.assertEqual(to_container_info(virt).state.status, "")

    def test_null_counters_decode_as_zero(self):
        dom = VirtDomInfo.model_validate({"status": 5, "usedMemory": None, "virtCpu": None})
        cpu = VirtCpuInfo.model_validate({"cpu_time": None})

        self.assertEqual((dom.used_memory, dom.virt_cpu, cpu.cpu_time), (0, 0, 0))

    def test_state_carries_domain_label(self):
        shutoff = VirtContainerInfo(id="a", dom_info=VirtDomInfo(status=5))
        unknown = VirtContainerInfo(id="b", dom_info=VirtDomInfo(status=42))

        self.assertEqual(to_container_info(shutoff).state.status, "shutoff")
        self.assertEqual(to_container_info(unknown).state.status, "")


class TestToContainerInfo(unittest.TestCase):
    def test_maps_wire_payload(self):
        payload = {
            "Id": "192.168.11.51_13",
            "Name": "centos_65_3",
            "CpuInfo": {"cpu_time": 1, "system_time": 2, "user_time": 3},
            "DomInfo": {"status": 1, "usedMemory": 1, "maxMemory": 2, "cpuTime": 3, "virtCpu": 4},
            "ContainerConfig": {"Image": "/var/lib/libvirt/images/centos_65.qcow2", "Cmd": ["hd"]},
        }
        virt = VirtContainerInfo.model_validate(payload)
        info = to_container_info(virt)

        self.assertEqual(virt.cpu_info.user_time, 3)
        self.assertEqual(virt.dom_info.virt_cpu, 4)
        self.assertEqual(info.id, "192.168.11.51_13")
        self.assertEqual(info.name, "centos_65_3")
        self.assertEqual(info.image, "/var/lib/libvirt/images/centos_65.qcow2")
        self.assertEqual(info.config.cmd, ["hd"])
        self.assertTrue(info.state.running)
        self.assertEqual(info.state.status, "running")

    def test_lowercase_keys_are_accepted(self):
        virt = VirtContainerInfo.model_validate({"id": "x", "name": "vm", "dominfo": {"status": 1}})

        self.assertEqual(virt.id, "x")
        self.assertEqual(virt.name, "vm")
        self.assertTrue(is_running(virt))

    def test_missing_config_has_empty_image(self):
        info = to_container_info(VirtContainerInfo(id="x", name="vm"))

        self.assertEqual(info.image, "")
        self.assertIsNone(info.config)
        self.assertFalse(info.state.running)

    def test_creation_payload_decodes_as_info(self):
        wire = to_virt_config(_config(["cdrom"], image="/iso/debian.iso"), "deb").model_dump_json(by_alias=True)

        info = to_container_info(VirtContainerInfo.model_validate_json(wire))

        self.assertEqual(info.name, "deb")
        self.assertEqual(info.image, "/iso/debian.iso")
        self.assertEqual(info.config.host_config.cpu_quota, 2)


class TestToContainer(unittest.TestCase):
    def test_listing_entry(self):
        info = ContainerInfo(
            id="a",
            name="vm-a",
            image="/x.qcow2",
            config=ContainerConfig(cmd=["hd"]),
            state=State(running=True),
        )
        container = to_container(info)

        self.assertEqual(container.id, "a")
        self.assertEqual(container.names, ["vm-a"])
        self.assertEqual(container.image, "/x.qcow2")
        self.assertEqual(container.command, "hd")
        self.assertEqual(container.status, "Running")

    def test_stopped_listing_entry(self):
        container = to_container(ContainerInfo(id="a", name="vm-a"))

        self.assertEqual(container.status, "Not Running")
        self.assertEqual(container.command, "")


if __name__ == "__main__":
    unittest.main()
