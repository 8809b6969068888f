from league_bot.commands.replies import AuditNotice, EmbedField, Reply
from tests.helpers import FIXED_NOW


class TestReply:
    def test_plain(self) -> None:
        reply = Reply.plain("hi")
        assert reply.text == "hi"
        assert reply.embed is None


class TestAuditNotice:
    def test_to_embed(self) -> None:
        notice = AuditNotice(actor="commish", player="Alice", fields=(("HR", 12), ("AVG", 0.31)), timestamp=FIXED_NOW)
        embed = notice.to_embed()
        assert embed.title == "Stats Updated"
        assert embed.color == "red"
        assert embed.description == "**commish** updated stats for **Alice**."
        assert embed.fields == (EmbedField("HR", "12"), EmbedField("AVG", "0.31"))
        assert embed.timestamp == FIXED_NOW
