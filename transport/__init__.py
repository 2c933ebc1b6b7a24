from config import VOICE_SOURCE


def get_renderer(source):
    if source == VOICE_SOURCE:
        from .google_assistant import GoogleAssistantRenderer
        return GoogleAssistantRenderer()
    else:
        # Slack, Dialogflow console and everything else get the chat layout
        from .slack import SlackRenderer
        return SlackRenderer()
