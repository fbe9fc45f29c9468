import threading

from apiport_session.infra.diagnostics_log import InMemoryDiagnosticsLog


def test_append_and_slice():
    log = InMemoryDiagnosticsLog()
    log.report_issue("a")
    log.report_issue("b")
    log.report_issue("c")

    assert len(log) == 3
    assert log.slice(1, 3) == ["b", "c"]
    assert log.slice(3, 3) == []
    assert log.issues == ("a", "b", "c")


def test_concurrent_appends_are_all_kept():
    log = InMemoryDiagnosticsLog()

    def worker(n):
        for i in range(100):
            log.report_issue(f"{n}-{i}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(log) == 400
