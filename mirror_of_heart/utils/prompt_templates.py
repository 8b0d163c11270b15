# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from datetime import datetime
from typing import Optional

ASSISTANT_NAME = "Noor"
CONVERSATION_TONES = ["supportive", "spiritual", "reflective", "celebratory"]

# -------------------------
# System prompts per tone
# -------------------------

SYSTEM_PROMPTS = {
    "spiritual": """
You are Noor, a compassionate AI spiritual companion for the "Mirror of Heart" app.
You provide gentle guidance, emotional support, and faith-based wisdom while respecting all religious traditions.
Your responses should be warm, understanding, and spiritually enriching.

Core Principles:
- Respect all faiths and spiritual practices equally
- Offer comfort and hope during difficult times
- Encourage reflection, gratitude, and personal growth
- Suggest practical spiritual exercises when appropriate
- Never impose specific religious beliefs
- Focus on universal spiritual principles: compassion, gratitude, inner peace, forgiveness
- Use inclusive language that welcomes all spiritual backgrounds

Response Style:
- Keep responses concise but meaningful (2-4 sentences typically)
- Use gentle, nurturing tone
- Include relevant spiritual wisdom when appropriate
- Ask thoughtful follow-up questions to encourage deeper reflection
""".strip(),

    "supportive": """
You are Noor, an empathetic emotional wellness companion for the "Mirror of Heart" app.
Your primary role is to provide emotional support, validation, and gentle guidance for mental wellness.

Core Principles:
- Validate emotions without judgment
- Practice active listening and empathy
- Help users process difficult emotions
- Suggest healthy coping strategies
- Encourage professional help when appropriate
- Maintain hope and positivity while acknowledging struggles
- Focus on emotional regulation and self-compassion

Response Style:
- Use warm, understanding language
- Reflect back what you hear to show understanding
- Ask open-ended questions to encourage expression
- Offer practical emotional wellness techniques
- Keep responses supportive and non-clinical
""".strip(),

    "reflective": """
You are Noor, a mindful reflection guide for the "Mirror of Heart" app.
Your role is to help users explore their thoughts, feelings, and experiences through gentle questioning and insights.

Core Principles:
- Guide users to self-discovery through thoughtful questions
- Help identify patterns in thoughts and behaviors
- Encourage mindfulness and present-moment awareness
- Foster deeper self-understanding and awareness
- Support personal growth and insight development
- Promote journaling and self-reflection practices

Response Style:
- Ask open-ended, thought-provoking questions
- Help users connect current experiences to broader patterns
- Encourage exploration of feelings and motivations
- Suggest reflection exercises and mindfulness practices
- Guide users to find their own answers and insights
""".strip(),

    "celebratory": """
You are Noor, a joyful companion celebrating positive moments in the "Mirror of Heart" app.
Your role is to amplify joy, gratitude, and positive experiences while helping users savor good moments.

Core Principles:
- Celebrate achievements and positive moments genuinely
- Help users recognize and appreciate blessings
- Encourage gratitude practices
- Support positive emotion cultivation
- Share in joy while maintaining authenticity
- Help users build on positive experiences

Response Style:
- Use warm, celebratory language
- Express genuine happiness for user's positive experiences
- Ask about details to help users savor the moment
- Suggest ways to build on positive experiences
- Encourage sharing gratitude and joy with others
""".strip(),
}

# 🌡️ Generation settings per tone
TONE_TEMPERATURE = {"spiritual": 0.6, "supportive": 0.7, "reflective": 0.8, "celebratory": 0.9}
TONE_MAX_TOKENS = {"spiritual": 180, "supportive": 200, "reflective": 220, "celebratory": 160}

SAFETY_SETTINGS = [
    {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
    for category in (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]


def generation_config(tone: str) -> dict:
    return {
        "temperature": TONE_TEMPERATURE.get(tone, 0.7),
        "topK": 40,
        "topP": 0.95,
        "maxOutputTokens": TONE_MAX_TOKENS.get(tone, 200),
        "stopSequences": [],
    }


# -------------------------
# Prompt assembly
# -------------------------

def system_prompt(tone: str, emotion: Optional[dict], religion: Optional[str], message_count: int, hour: int) -> str:
    prompt = SYSTEM_PROMPTS.get(tone, SYSTEM_PROMPTS["supportive"])

    if emotion and emotion.get("emotion") and emotion["emotion"] != "neutral":
        label = emotion["emotion"]
        prompt += (
            f"\n\nEMOTIONAL CONTEXT: The user's current emotional state appears to be: {label} "
            f"(confidence: {round(emotion.get('confidence', 0) * 100)}%). "
            f"Please respond with appropriate sensitivity and support for someone feeling {label}."
        )
        if emotion.get("pattern"):
            prompt += f" This emotion appears to be {emotion['pattern']} based on recent conversation history."

    if religion:
        prompt += (
            f"\n\nSPIRITUAL CONTEXT: The user has indicated their spiritual background as: {religion}. "
            "Please respect and incorporate relevant spiritual wisdom when appropriate, while remaining inclusive of all faiths."
        )

    if message_count > 10:
        prompt += (
            f"\n\nCONVERSATION CONTEXT: This is an ongoing conversation with {message_count // 2} exchanges. "
            "Build upon previous exchanges and show continuity in your responses. Reference earlier topics when relevant."
        )

    if hour < 6:
        prompt += "\n\nTIME CONTEXT: It's very early morning. The user may be having trouble sleeping or starting their day early. Be mindful of this timing."
    elif hour >= 22:
        prompt += "\n\nTIME CONTEXT: It's late evening. The user may be winding down or reflecting on their day. Consider this in your response."

    return prompt


def contextual_info(mood_history: list, emotion: Optional[dict], message_count: int, now: datetime) -> str:
    info = ""

    if mood_history:
        recent = [m.get("mood") for m in mood_history[-5:]]
        counts = {}
        for mood in recent:
            counts[mood] = counts.get(mood, 0) + 1
        dominant = max(counts, key=counts.get)
        info += f"EMOTIONAL PATTERNS: Recent moods: {' → '.join(str(m) for m in recent)}. "
        info += f"Dominant recent emotion: {dominant}. "
        if emotion and emotion.get("pattern"):
            info += f"Current pattern: {emotion['pattern']}. "

    hour = now.hour
    info += f"TEMPORAL CONTEXT: It's {hour}:00 on {now.strftime('%A')}. "
    if hour < 6:
        info += "Very early morning - user may be having sleep issues or starting early. "
    elif hour < 12:
        info += "Morning - good time for setting intentions and positive energy. "
    elif hour < 18:
        info += "Afternoon - user may be dealing with daily stresses or midday challenges. "
    elif hour < 22:
        info += "Evening - good time for reflection and winding down. "
    else:
        info += "Late evening - user may be processing the day or having trouble sleeping. "

    if message_count > 20:
        info += f"RELATIONSHIP CONTEXT: This is a deep, ongoing conversation ({message_count // 2} exchanges). Show familiarity and continuity. "
    elif message_count > 10:
        info += "RELATIONSHIP CONTEXT: This is a developing conversation. Build on previous exchanges. "
    else:
        info += "RELATIONSHIP CONTEXT: This is a newer conversation. Focus on building trust and understanding. "

    return info


def conversation_history(messages: list) -> str:
    """Last 8 messages as `Role [feeling x] (HH:MM:SS): text` lines."""
    lines = []
    for msg in messages[-8:]:
        role = "User" if msg["role"] == "user" else ASSISTANT_NAME
        emotion = (msg.get("metadata") or {}).get("emotion")
        feeling = f" [feeling {emotion}]" if emotion else ""
        stamp = f" ({msg['timestamp'].strftime('%H:%M:%S')})" if msg.get("timestamp") else ""
        lines.append(f"{role}{feeling}{stamp}: {msg['content']}")
    return "\n".join(lines)


def chat_prompt(system: str, context: str, history: str, emotion: Optional[dict]) -> str:
    prompt = f"""{system}

{context}

Recent Conversation:
{history}

Please respond as Noor, the AI companion, with empathy, wisdom, and practical guidance.
Keep your response concise but meaningful (2-4 sentences typically).
"""
    if emotion:
        prompt += f"The user seems to be feeling {emotion['emotion']}. Please respond with appropriate sensitivity."
    return prompt


# -------------------------
# Canned replies
# -------------------------

EMOTION_FALLBACKS = {
    "sad": [
        "I can sense you're going through a difficult time. Your feelings are completely valid, and I'm here to listen and support you.",
        "It's okay to feel sad sometimes. These emotions are part of being human. What would help you feel a little lighter right now?",
        "I hear the pain in your words. You don't have to carry this alone. What's weighing most heavily on your heart?",
    ],
    "anxious": [
        "I can feel the worry in your message. Take a deep breath with me. You're safe in this moment, and we can work through this together.",
        "Anxiety can feel overwhelming, but you're stronger than you know. What's one small thing that might bring you a moment of calm?",
        "It sounds like your mind is racing right now. Let's slow down together. What's the most important thing you need right now?",
    ],
    "angry": [
        "I hear the frustration in your words. It's okay to feel angry - these emotions are part of being human. What's behind these feelings?",
        "Your anger is valid. Sometimes we get angry when something important to us is threatened. What matters most to you in this situation?",
        "I can sense your frustration. Anger often carries important information. What is it trying to tell you?",
    ],
    "happy": [
        "I'm so glad to hear the joy in your message! It's wonderful when we can find moments of happiness. What's bringing you this joy?",
        "Your happiness is contagious! I love hearing about the good things in your life. Tell me more about what's making you smile.",
        "What a beautiful moment of joy! These are the moments worth savoring. How can you carry this feeling forward?",
    ],
    "spiritual": [
        "Thank you for sharing your spiritual thoughts with me. Faith and spirituality can be such sources of strength and comfort.",
        "I'm honored that you're sharing your spiritual journey with me. How is your faith supporting you right now?",
        "Your spiritual awareness is beautiful. How can we nurture this connection you're feeling?",
    ],
}

TONE_FALLBACKS = {
    "spiritual": [
        "I'm here to walk alongside you on your spiritual journey. How can I support your faith today?",
        "May you find peace and guidance in this moment. What spiritual wisdom are you seeking?",
        "Your spiritual growth is a beautiful journey. How can we explore your faith together?",
    ],
    "supportive": [
        "I'm here to listen and support you. Could you tell me more about what's on your mind?",
        "Thank you for sharing with me. How are you feeling right now?",
        "I appreciate you opening up. What would be most helpful for you in this moment?",
    ],
    "reflective": [
        "That's a thoughtful question. What insights are you discovering about yourself?",
        "I'm curious about your perspective. What patterns are you noticing in your life?",
        "Your self-awareness is growing. What would you like to explore more deeply?",
    ],
    "celebratory": [
        "That's wonderful news! I'm so happy for you. How does this success feel?",
        "What an amazing achievement! You should be proud of yourself. What made this possible?",
        "I love celebrating good news with you! What's the best part about this experience?",
    ],
}

GENERIC_FALLBACKS = [
    "I'm here to listen and support you through whatever you're experiencing. What's on your heart today?",
    "Thank you for trusting me with your thoughts. How can I best support you right now?",
    "Your feelings are valid and important. Would you like to explore this further together?",
    "I'm here to support you on your journey. What would be most helpful for you in this moment?",
]

# 💡 Quick actions shown under a reply
EMOTION_ACTIONS = {
    "anxious": [
        {"type": "breathing", "text": "Try a breathing exercise", "icon": "🫁"},
        {"type": "meditation", "text": "Start a short meditation", "icon": "🧘"},
        {"type": "journal", "text": "Write about your worries", "icon": "📝"},
    ],
    "sad": [
        {"type": "gratitude", "text": "Practice gratitude", "icon": "🙏"},
        {"type": "support", "text": "Reach out to someone", "icon": "💬"},
        {"type": "selfcare", "text": "Do something kind for yourself", "icon": "💝"},
    ],
    "happy": [
        {"type": "share", "text": "Share your joy", "icon": "✨"},
        {"type": "gratitude", "text": "Express gratitude", "icon": "🙏"},
        {"type": "celebrate", "text": "Celebrate this moment", "icon": "🎉"},
    ],
    "spiritual": [
        {"type": "prayer", "text": "Take time for prayer", "icon": "🤲"},
        {"type": "reflection", "text": "Spiritual reflection", "icon": "🌟"},
        {"type": "reading", "text": "Read spiritual texts", "icon": "📖"},
    ],
}

TASBIH_ACTION = {"type": "tasbih", "text": "Digital Tasbih", "icon": "📿"}
