"""Benchmark execution (provisioning, harness invocation, result collection).

Modules:
    - provision: Toolchain install commands and PATH preflight
    - harness: Harness identities, commands and subprocess invocation
    - results: ResultCollector keyed by harness
"""
