"""Golden vectors shared by the test modules."""

# Test-only seed; never produced by new_server_seed()
ZERO_SEED = "00" * 32
CLIENT_SEED = "abc123"
GOLDEN_DIGEST = "b0e6009669e6ce61c58bcc83cdef6529da6d28b7abdea1ea12547a8d24564aad"
ZERO_SEED_COMMITMENT = "60e05bd1b195af2f94112fa7197a5c88289058840ce7c6df9693756bc6250f55"
