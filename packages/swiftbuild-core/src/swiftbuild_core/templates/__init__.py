"""Action templates shipped with swiftbuild-core."""
