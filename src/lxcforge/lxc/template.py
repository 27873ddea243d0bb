"""LXC configuration template and renderer."""

import logging
from typing import Any, Callable, Dict, List, Optional

from jinja2 import Template, TemplateError

from lxcforge.errors import FatalStartupError
from lxcforge.lxc.values import get_memory_swap, ResolvConfPathHelper
from lxcforge.models.config import NetworkConfig
from lxcforge.models.container import ContainerDescriptor
from lxcforge.models.state import DirectiveKind, LxcDirective, ResolvedState
from lxcforge.utils.templates import compile_template


logger = logging.getLogger(__name__)


LXC_TEMPLATE = """\
# hostname
{% if container.config.hostname %}
lxc.utsname = {{ container.config.hostname }}
{% else %}
lxc.utsname = {{ container.id }}
{% endif %}
#lxc.aa_profile = unconfined

# use a dedicated pts for the container (and limit the number of pseudo terminal
# available)
lxc.pts = 1024

# disable the main console
lxc.console = none

# no controlling tty at all
lxc.tty = 1

# no implicit access to devices
lxc.cgroup.devices.deny = a

# /dev/null and zero
lxc.cgroup.devices.allow = c 1:3 rwm
lxc.cgroup.devices.allow = c 1:5 rwm

# consoles
lxc.cgroup.devices.allow = c 5:1 rwm
lxc.cgroup.devices.allow = c 5:0 rwm
lxc.cgroup.devices.allow = c 4:0 rwm
lxc.cgroup.devices.allow = c 4:1 rwm

# /dev/urandom,/dev/random
lxc.cgroup.devices.allow = c 1:9 rwm
lxc.cgroup.devices.allow = c 1:8 rwm

# /dev/pts/*
lxc.cgroup.devices.allow = c 136:* rwm
lxc.cgroup.devices.allow = c 5:2 rwm

# tuntap
lxc.cgroup.devices.allow = c 10:200 rwm

# fuse
#lxc.cgroup.devices.allow = c 10:229 rwm

# rtc
#lxc.cgroup.devices.allow = c 254:0 rwm

# network configuration
lxc.network.type = veth
lxc.network.flags = up
lxc.network.link = {{ network.bridge_iface }}
lxc.network.name = {{ network.veth_name }}
lxc.network.mtu = {{ network.mtu }}
lxc.network.ipv4 = {{ container.network_settings.ip_address }}/{{ container.network_settings.ip_prefix_len }}

# root filesystem
{% set rootfs = container.mountpoint.root %}
lxc.rootfs = {{ rootfs }}

# standard mount point
lxc.mount.entry = proc {{ rootfs }}/proc proc nosuid,nodev,noexec 0 0
lxc.mount.entry = sysfs {{ rootfs }}/sys sysfs nosuid,nodev,noexec 0 0
lxc.mount.entry = devpts {{ rootfs }}/dev/pts devpts newinstance,ptmxmode=0666,nosuid,noexec 0 0
#lxc.mount.entry = varrun {{ rootfs }}/var/run tmpfs mode=755,size=4096k,nosuid,nodev,noexec 0 0
#lxc.mount.entry = varlock {{ rootfs }}/var/lock tmpfs size=1024k,nosuid,nodev,noexec 0 0
#lxc.mount.entry = shm {{ rootfs }}/dev/shm tmpfs size=65536k,nosuid,nodev,noexec 0 0

# inject the init binary
lxc.mount.entry = {{ container.sys_init_path }} {{ rootfs }}/sbin/init none bind,ro 0 0

# in order to get a working DNS environment, bind mount (ro) the resolver file into the container
lxc.mount.entry = {{ get_resolv_conf_path() }} {{ rootfs }}/etc/resolv.conf none bind,ro 0 0

# drop linux capabilities (apply mainly to the user root in the container)
lxc.cap.drop = audit_control audit_write mac_admin mac_override mknod setfcap setpcap sys_admin sys_boot sys_module sys_nice sys_pacct sys_rawio sys_resource sys_time sys_tty_config

# limits
{% if container.config.memory %}
lxc.cgroup.memory.limit_in_bytes = {{ container.config.memory }}
lxc.cgroup.memory.soft_limit_in_bytes = {{ container.config.memory }}
{% set mem_swap = get_memory_swap(container.config) %}
{% if mem_swap %}
lxc.cgroup.memory.memsw.limit_in_bytes = {{ mem_swap }}
{% endif %}
{% endif %}
"""


def classify_key(key: str) -> DirectiveKind:
    """Map an LXC configuration key to its directive kind."""
    if key.startswith("lxc.network."):
        return DirectiveKind.NETWORK
    if key.startswith("lxc.cgroup."):
        return DirectiveKind.CGROUP
    if key.startswith("lxc.cap."):
        return DirectiveKind.CAPABILITY
    if key in ("lxc.rootfs", "lxc.mount.entry"):
        return DirectiveKind.MOUNT
    return DirectiveKind.NAMESPACE


def parse_directives(text: str) -> List[LxcDirective]:
    """Parse LXC configuration text, skipping blank lines and comments."""
    directives = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise ValueError(f"Malformed LXC directive: {line!r}")
        key = key.strip()
        directives.append(LxcDirective(key=key, value=value.strip(), kind=classify_key(key)))
    return directives


def serialize_directives(directives: List[LxcDirective]) -> str:
    """Serialize directives back to LXC configuration text."""
    return "".join(f"{d}\n" for d in directives)


class LxcTemplateEngine:
    """Compiled LXC template bound to the startup state.

    Compiled once at startup; ``render`` is pure and safe to call from any
    number of threads.
    """

    def __init__(
        self,
        template: Template,
        resolved: Optional[ResolvedState] = None,
        network: Optional[NetworkConfig] = None,
    ):
        self.template = template
        self.resolved = resolved
        self.network = network or NetworkConfig()

    @classmethod
    def compile(
        cls,
        resolved: Optional[ResolvedState] = None,
        network: Optional[NetworkConfig] = None,
        template_source: str = LXC_TEMPLATE,
        helpers: Optional[Dict[str, Callable[..., Any]]] = None,
    ) -> "LxcTemplateEngine":
        """Compile ``template_source`` with the render-time helpers bound.

        Raises:
            FatalStartupError: the template does not parse.
        """
        bound = {
            "get_memory_swap": get_memory_swap,
            "get_resolv_conf_path": ResolvConfPathHelper(resolved),
        }
        bound.update(helpers or {})
        try:
            template = compile_template(template_source, bound)
        except TemplateError as e:
            raise FatalStartupError("compile-template", str(e)) from e

        logger.debug("LXC template compiled")
        return cls(template, resolved=resolved, network=network)

    def render(
        self,
        container: ContainerDescriptor,
        resolved: Optional[ResolvedState] = None,
    ) -> str:
        """Render the LXC configuration for ``container``.

        ``resolved`` overrides the state the engine was compiled with for
        this call only.
        """
        context = {"container": container, "network": self.network}
        if resolved is not None:
            context["get_resolv_conf_path"] = ResolvConfPathHelper(resolved)
        return self.template.render(**context)

    def render_directives(
        self,
        container: ContainerDescriptor,
        resolved: Optional[ResolvedState] = None,
    ) -> List[LxcDirective]:
        """Render the configuration as an ordered list of typed directives."""
        return parse_directives(self.render(container, resolved=resolved))
