"""javadc tests

Unit tests run against ``FakeEngine`` (tests/helpers.py), which stands in for
CFR and checks the class-file magic of whatever the lookup hands it.  Only
test_e2e_cfr.py needs a real JVM, javac and a CFR jar.

Test Structure:
- test_models.py - internal-name conversion and tool argument models
- test_archive.py - JAR listing, extraction and the extraction workspace
- test_locator.py - path / package / JAR resolution
- test_orchestrator.py - class lookup and engine options
- test_service.py - stage-prefixed errors, workspace lifetime, concurrency
- test_registry.py - tool names and identifier normalization
- test_provider_decompiler.py - MCP tool schemas and handlers
- test_tool_provider_manager_routing.py - routing and error responses
- test_session_context.py - session ID binding
- test_server.py - /health and an in-memory MCP round trip
- test_config.py - ConfigManager defaults, env overrides, persistence
- test_cli.py - click entry point
- test_e2e_cfr.py - real CFR decompilation (skipped without javac / CFR)

Fixtures (conftest.py):
- fake_engine - FakeEngine instance (function scope)
- workspace_root - directory that receives extraction workspaces
- locator - Locator with an empty environment and workspaces under workspace_root
- service - DecompilerService(fake_engine, locator)
- clean_env - removes JAVADC_* and CLASSPATH from the environment

Usage:
    pytest tests/ -v
    pytest tests/ -m "not e2e"
    JAVADC_CFR_JAR=/path/to/cfr.jar pytest tests/test_e2e_cfr.py -v
"""
