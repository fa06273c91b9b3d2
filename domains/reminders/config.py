"""Reminders domain configuration - constants and oracle prompts."""

# Delivery loop cadence
TICK_SECONDS = 3

# How long a delivered daily reminder stays "sent" before it is re-armed
REARM_COOLDOWN_SECONDS = 60

# Oracle sampling
GATE_TEMPERATURE = 0.2
MOTIVATION_TEMPERATURE = 0.7

# Owner commands answered without the intent oracle
LIST_COMMANDS = {"list reminders", "show reminders", "my reminders", "reminders"}

INTENT_PROMPT = """You are a helpful assistant managing chat reminders.

Return ONLY JSON. No explanation.

```json
{{
  "action": "create" or "delete",
  "text": "reminder content",
  "time": "HH:mm",
  "repeat": "once" or "daily"
}}
```

Examples:
User: Remind me to pray Fajr at 5:00 AM
-> {{
  "action": "create",
  "text": "pray Fajr",
  "time": "05:00",
  "repeat": "daily"
}}

User: Delete my Fajr reminder
-> {{
  "action": "delete",
  "text": "pray Fajr"
}}

Now extract data for:
"{message}"
"""

GATE_PROMPT = """Evaluate the following activity based on Islamic principles. Categorize it into one of these:
- Encouraged (e.g., prayer, charity, seeking knowledge)
- Permissible (e.g., eating, working, resting)
- Discouraged (e.g., wasting time, watching movies for entertainment, backbiting)

Activity: "{text}"

Reply with one word only: Encouraged, Permissible, or Discouraged."""

MOTIVATION_PROMPT = """You are a helpful Islamic assistant.

Your task is to check if the user's reminder involves something:
1. Islamic (e.g., namaz, prayer, Quran, zakat, fasting): respond with a short Quran/Hadith-based motivational message.
2. Halal (e.g., study, work, helping mom): respond with a general motivational message.
3. Haram (e.g., alcohol, drugs, gambling, stealing): WARN the user firmly but politely with an Islamic reminder that this is not allowed and advise repentance.
Only return the message. Give the reference number if you mention any ayat, hadith or Islamic book, and never give a wrong hadith number. No explanation or JSON.

Reminder: "{text}"
"""

# Replies
REPLY_NOT_UNDERSTOOD = "Could not understand the reminder. Try again."
REPLY_INCOMPLETE_CREATE = (
    "I need both what to remind you about and when, "
    "e.g. \"remind me to pray Fajr at 5:00 AM every day\"."
)
REPLY_AMBIGUOUS_DELETE = (
    "Could not find a reminder to delete. Please specify the reminder text "
    "or say \"delete all reminders\"."
)
REPLY_DISCOURAGED = (
    "This activity may not be encouraged in Islam.\n\n"
    "Consider using your time for something beneficial like reading, reflecting, or dhikr.\n\n"
    "\"Indeed, the best of people are those who are most beneficial to others.\" (Hadith)"
)
