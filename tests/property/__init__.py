"""Property-based tests for foldkit.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- test_collector_properties.py: sequential vs partitioned folds agree
- test_file_sink_state_machine.py: sink lifecycle invariants
"""
