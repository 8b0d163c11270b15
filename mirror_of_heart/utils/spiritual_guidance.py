# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

# Static guidance tables used by the mood detection service.

EMOTION_CATEGORIES = {
    "peaceful": {
        "keywords": ["calm", "serene", "tranquil", "peaceful", "relaxed", "centered", "balanced", "still"],
        "spiritual_context": "inner peace",
        "guidance": "Continue nurturing this beautiful state of peace through mindfulness and gratitude",
        "color": "#4ade80",
        "polarity": "positive",
        "practices": ["meditation", "dhikr", "contemplation"],
    },
    "grateful": {
        "keywords": ["thankful", "blessed", "grateful", "appreciative", "fortunate", "abundance"],
        "spiritual_context": "gratitude and blessings",
        "guidance": "Your gratitude opens doors to more blessings. Share this joy with others",
        "color": "#f59e0b",
        "polarity": "positive",
        "practices": ["gratitude prayer", "thanksgiving", "charity"],
    },
    "anxious": {
        "keywords": ["worried", "anxious", "nervous", "stressed", "overwhelmed", "panic", "fear", "uncertain"],
        "spiritual_context": "seeking divine comfort",
        "guidance": "In times of anxiety, remember that you are held by divine love and protection",
        "color": "#ef4444",
        "polarity": "negative",
        "practices": ["breathing exercises", "prayer", "seeking refuge"],
    },
    "sad": {
        "keywords": ["sad", "depressed", "down", "upset", "hurt", "pain", "sorrow", "grief", "lonely"],
        "spiritual_context": "healing and comfort",
        "guidance": "Your pain is seen and acknowledged. Healing comes through patience and faith",
        "color": "#3b82f6",
        "polarity": "negative",
        "practices": ["prayer for healing", "community support", "remembrance"],
    },
    "joyful": {
        "keywords": ["happy", "joy", "excited", "wonderful", "amazing", "great", "fantastic", "delighted"],
        "spiritual_context": "divine joy",
        "guidance": "Your joy is a gift from the divine. Let it illuminate your path and inspire others",
        "color": "#10b981",
        "polarity": "positive",
        "practices": ["celebration", "sharing joy", "praise"],
    },
    "spiritual": {
        "keywords": ["pray", "prayer", "god", "allah", "divine", "blessed", "faith", "spiritual", "meditation", "worship"],
        "spiritual_context": "divine connection",
        "guidance": "Your spiritual awareness is growing. Continue to nurture this sacred connection",
        "color": "#8b5cf6",
        "polarity": "transcendent",
        "practices": ["prayer", "meditation", "study", "worship"],
    },
    "angry": {
        "keywords": ["angry", "mad", "furious", "frustrated", "irritated", "annoyed", "rage", "hate"],
        "spiritual_context": "seeking patience",
        "guidance": "Channel this energy toward positive change. Seek patience and understanding",
        "color": "#dc2626",
        "polarity": "negative",
        "practices": ["patience prayer", "forgiveness", "cooling down"],
    },
    "hopeful": {
        "keywords": ["hopeful", "optimistic", "confident", "positive", "encouraged", "inspired"],
        "spiritual_context": "divine hope",
        "guidance": "Hope is a light in darkness. Trust in the divine plan unfolding",
        "color": "#06b6d4",
        "polarity": "positive",
        "practices": ["hope prayers", "positive affirmations", "trust building"],
    },
    "neutral": {
        "keywords": ["okay", "fine", "normal", "regular", "usual", "average"],
        "spiritual_context": "balanced state",
        "guidance": "In stillness, there is wisdom. Use this balanced time for reflection",
        "color": "#6b7280",
        "polarity": "neutral",
        "practices": ["reflection", "mindfulness", "preparation"],
    },
}

SPIRITUAL_TRADITIONS = {
    "Islam": {
        "practices": ["salah", "dhikr", "dua", "quran", "tasbih"],
        "keywords": ["allah", "prophet", "islam", "muslim", "quran", "prayer", "mosque", "ramadan"],
        "guidance": {
            "anxious": "Remember Allah's promise: 'And whoever relies upon Allah - then He is sufficient for him.'",
            "grateful": "Say 'Alhamdulillahi rabbil alameen' - All praise is due to Allah, Lord of the worlds.",
            "sad": "Allah is with those who are patient. Your trials are a test and purification.",
        },
    },
    "Christianity": {
        "practices": ["prayer", "bible study", "worship", "communion", "fellowship"],
        "keywords": ["jesus", "christ", "god", "lord", "bible", "church", "prayer", "faith"],
        "guidance": {
            "anxious": "Cast all your anxiety on Him because He cares for you. (1 Peter 5:7)",
            "grateful": "Give thanks in all circumstances; for this is God's will for you in Christ Jesus.",
            "sad": "The Lord is close to the brokenhearted and saves those who are crushed in spirit.",
        },
    },
    "Judaism": {
        "practices": ["prayer", "torah study", "shabbat", "mitzvot", "meditation"],
        "keywords": ["hashem", "torah", "shabbat", "synagogue", "rabbi", "jewish", "hebrew"],
        "guidance": {
            "anxious": "Cast your burden upon the Lord, and He will sustain you.",
            "grateful": "Blessed are You, Lord our God, King of the universe.",
            "sad": "The Lord is near to all who call upon Him in truth.",
        },
    },
    "Universal": {
        "practices": ["meditation", "mindfulness", "gratitude", "compassion", "service"],
        "keywords": ["universe", "energy", "consciousness", "mindfulness", "compassion"],
        "guidance": {
            "anxious": "You are connected to the infinite source of peace and strength.",
            "grateful": "Gratitude opens the door to abundance and joy.",
            "sad": "This too shall pass. You are held by love greater than you know.",
        },
    },
}

GENERAL_SPIRITUAL_TERMS = [
    "soul", "spirit", "divine", "sacred", "holy", "blessed", "prayer",
    "meditation", "faith", "belief", "worship", "gratitude", "peace",
    "love", "compassion", "forgiveness", "wisdom", "truth", "light",
]

DEFAULT_GUIDANCE = "You are held by love greater than you know."

# 💡 Suggestions per emotion, in display order
EMOTION_SUGGESTIONS = {
    "anxious": [
        {"type": "breathing", "title": "Breathing Exercise",
         "description": "Try a 4-7-8 breathing pattern to calm your nervous system",
         "action": "breathing_exercise", "icon": "🫁", "priority": 5},
        {"type": "prayer", "title": "Calming Prayer",
         "description": "Take a moment for prayer or meditation to find peace",
         "action": "prayer_time", "icon": "🤲", "priority": 4},
    ],
    "sad": [
        {"type": "gratitude", "title": "Gratitude Practice",
         "description": "List three things you're grateful for today",
         "action": "gratitude_practice", "icon": "🙏", "priority": 4},
        {"type": "connection", "title": "Reach Out",
         "description": "Connect with someone who cares about you",
         "action": "social_connection", "icon": "💬", "priority": 5},
    ],
    "joyful": [
        {"type": "sharing", "title": "Share Your Joy",
         "description": "Share this positive energy with others around you",
         "action": "share_joy", "icon": "✨", "priority": 3},
        {"type": "gratitude", "title": "Express Gratitude",
         "description": "Take a moment to thank the divine for this blessing",
         "action": "gratitude_prayer", "icon": "🙏", "priority": 3},
    ],
    "spiritual": [
        {"type": "meditation", "title": "Spiritual Reflection",
         "description": "Spend time in quiet contemplation and prayer",
         "action": "spiritual_reflection", "icon": "🧘", "priority": 3},
        {"type": "study", "title": "Sacred Reading",
         "description": "Read from your sacred texts for guidance and wisdom",
         "action": "sacred_reading", "icon": "📖", "priority": 3},
    ],
    "peaceful": [
        {"type": "meditation", "title": "Mindful Moment",
         "description": "Savor this peaceful state with mindful awareness",
         "action": "mindfulness", "icon": "🧘", "priority": 2},
    ],
}

TASBIH_SUGGESTION = {
    "type": "tasbih", "title": "Digital Tasbih",
    "description": "Use the digital tasbih for dhikr and remembrance",
    "action": "tasbih_counter", "icon": "📿", "priority": 3,
}

IMMEDIATE_SUPPORT_SUGGESTION = {
    "type": "emergency", "title": "Immediate Support",
    "description": "Consider reaching out to a counselor or trusted friend",
    "action": "seek_support", "icon": "🆘", "priority": 5,
}
