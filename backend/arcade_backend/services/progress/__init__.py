"""Player progress: the device/server merge and single-field updates.

`reconcile` and the update variants are pure; `sync` owns the locked
read-modify-write against the user row.
"""
