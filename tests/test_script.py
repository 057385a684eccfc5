"""Tests for Script: hashing, EVALSHA fallback and labels."""

from redis.exceptions import NoScriptError, ResponseError

from redisson import metrics
from redisson.script import script_hash
from tests.fixtures.fake import make_client, sent

SRC = "return ARGV[1]"


class TestHash:
    def test_sha1(self):
        assert script_hash("return 1") == "e0e1f9fabfc9d4800c877a703b823ac0578ff8db"

    def test_hash_matches_source(self, fake_client):
        script = fake_client.create_script(SRC)
        assert script.hash() == script_hash(SRC)


class TestRun:
    def test_evalsha_hit(self, fake_client, driver):
        driver.execute_command.return_value = b"hello"
        script = fake_client.create_script(SRC)
        assert script.run(["k"], "hello").result() == "hello"
        assert sent(driver) == [["EVALSHA", script.hash(), "1", "k", "hello"]]

    def test_falls_back_to_eval(self, fake_client, driver):
        driver.execute_command.side_effect = [NoScriptError("No matching script."), b"hello"]
        script = fake_client.create_script(SRC)
        assert script.run([], "hello").result() == "hello"
        assert sent(driver) == [
            ["EVALSHA", script.hash(), "0", "hello"],
            ["EVAL", SRC, "0", "hello"],
        ]

    def test_falls_back_on_prefixed_message(self, fake_client, driver):
        driver.execute_command.side_effect = [ResponseError("NOSCRIPT No matching script."), b"x"]
        assert fake_client.create_script(SRC).run([], "x").result() == "x"
        assert sent(driver)[1][0] == "EVAL"

    def test_other_errors_not_retried(self, fake_client, driver):
        driver.execute_command.side_effect = ResponseError("ERR Error running script")
        result = fake_client.create_script(SRC).run([], "x")
        assert isinstance(result.err, ResponseError)
        assert len(sent(driver)) == 1

    def test_run_ro(self, fake_client, driver):
        driver.execute_command.side_effect = [NoScriptError("No matching script."), b"x"]
        script = fake_client.create_script(SRC)
        script.run_ro(["k"], "x")
        assert [argv[0] for argv in sent(driver)] == ["EVALSHA_RO", "EVAL_RO"]
        assert sent(driver)[0][1] == script.hash()


class TestLabel:
    def test_named_script_label(self, driver):
        client = make_client(driver)
        driver.execute_command.return_value = b"1"
        labels = {"command": "Script", "s_command": "greet"}

        def count():
            for family in metrics.exec_timing.collect():
                for s in family.samples:
                    if s.name == "redis_exec_timing_count" and s.labels == labels:
                        return s.value
            return 0.0

        before = count()
        client.create_script_with_name("greet", SRC).run([], "x")
        assert count() == before + 1
        assert repr(client.create_script_with_name("greet", SRC)) == "<Script greet>"
