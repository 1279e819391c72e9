# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""volk-gen CLI commands.

Command mappings are used by cli.py's LazyGroup for lazy loading.
"""

# Format: 'command_name': (relative_module, attribute_name)
_COMMAND_REGISTRY = {
    "arch_flags": (".arch_flags", "arch_flags"),
    "machines": (".machines", "machines"),
    "machine_flags": (".machine_flags", "machine_flags"),
    "render": (".render", "render"),
    "info": (".info", "info"),
}

COMMAND_MAP = {
    name: (f"volk_gen.cli.commands{module}", attr)
    for name, (module, attr) in _COMMAND_REGISTRY.items()
}
