# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Internal utilities for volk-gen.

This package contains private implementation details that are not part of
the public API and may change without notice.

Subpackages:
- io: file and YAML loading utilities

Modules:
- logging: Logging configuration
"""
