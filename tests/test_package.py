import firestore_mock


def test_public_names_are_exported() -> None:
    for name in firestore_mock.__all__:
        assert hasattr(firestore_mock, name)


def test_client_is_usable_from_package_root() -> None:
    db = firestore_mock.MockFirestore({"things": {"a": {"n": 1}}})
    future = db.collection("things").get()
    db.flush()
    assert isinstance(future.result(timeout=1), firestore_mock.QuerySnapshot)
