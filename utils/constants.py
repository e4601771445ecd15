"""
utils/constants.py

Purpose: Centralized static content

- All user-facing messages
- Button labels
- Operator and diagnostic texts

(Prevents hardcoding across the codebase)
"""

# ============================================================
# WELCOME
# ============================================================

WELCOME_MESSAGE = (
    "Здравствуйте. Я бережный помощник Марии Губкиной. Если сейчас вам трудно найти опору "
    "или эмоции переполняют — я рядом. Выберите, что вы чувствуете прямо сейчас:"
)

# ============================================================
# EMOTIONAL STATES
# ============================================================

STATE_LABELS = {
    "anxiety": "😰 Тревога / Паника",
    "anger": "😡 Гнев / Раздражение",
    "apathy": "😶‍🌫️ Апатия / Сил нет",
}

STATE_EXPLANATIONS = {
    "anxiety": (
        "Когда нас накрывает волна тревоги, мозг начинает работать в режиме катастрофизации. "
        "Он \"прокручивает\" худшие сценарии будущего так ярко, что тело начинает верить, будто это "
        "происходит прямо сейчас. Сердце бьется чаще, дыхание становится поверхностным — это древний "
        "механизм защиты, который включился не вовремя. Важно понять: эти мысли — не факты. Сейчас вы "
        "находитесь в безопасности, и вашей нервной системе просто нужен физический сигнал, чтобы выйти "
        "из режима \"бей или беги\"."
    ),
    "anger": (
        "Гнев — это огромный импульс энергии, который возник внутри, чтобы защитить ваши границы или "
        "ценности. Если мы его подавляем, он превращается в яд для тела или \"взрывается\" на близких. "
        "В этом состоянии бесполезно пытаться \"просто успокоиться\" головой, потому что гнев живет в "
        "мышцах. Чтобы он перестал вас затапливать, нам нужно дать этой энергии безопасный выход, "
        "сбросить лишнее напряжение через физическое усилие, не причиняя вреда ни себе, ни окружающим."
    ),
    "apathy": (
        "Состояние, когда \"сели батарейки\", — это часто не лень, а защитное торможение психики. "
        "Когда стресса или неопределенности становится слишком много, система просто выключает свет, "
        "чтобы не сгореть от перегруза. В такие моменты бесполезно заставлять себя быть продуктивным. "
        "Сейчас ваша задача — не совершить подвиг, а мягко \"заземлиться\", вернуться из вакуума своих "
        "мыслей и переживаний в реальный мир, почувствовать опору и вернуть себе контроль над "
        "маленькими вещами."
    ),
}

STATE_TECHNIQUES = {
    "anxiety": (
        "Давайте попробуем восстановить ритм через тело. Сделайте глубокий, но спокойный вдох на 4 "
        "счета. Представьте, как воздух наполняет легкие до самого низа. Задержите дыхание на 4 счета. "
        "Теперь плавно, как через соломинку, выдыхайте на 4 счета, отпуская напряжение из челюсти и "
        "плеч. Снова задержка на 4. Повторите этот цикл 5–7 раз. Вы заметите, как с каждым кругом "
        "мысли становятся чуть менее громкими, а пульс замедляется."
    ),
    "anger": (
        "Прямо сейчас, где бы вы ни были, сожмите кулаки изо всей силы. Напрягите руки, плечи, пресс, "
        "даже мышцы лица. Представьте, что вы сжимаете пружину до предела. Держите это напряжение 5–7 "
        "секунд... А теперь — резкий, шумный выдох и мгновенное расслабление. Почувствуйте, как тяжесть "
        "уходит из рук в пол. Сделайте так трижды. Этот резкий контраст \"напряжение-расслабление\" "
        "дает мозгу команду выключить режим атаки."
    ),
    "apathy": (
        "Давайте выполним практику \"5-4-3-2-1\". Медленно оглянитесь вокруг и отметьте 5 предметов "
        "синего или зеленого цвета. Прислушайтесь к пространству и выделите 3 разных звука (тик часов, "
        "шум за окном, ваше дыхание). Почувствуйте 2 физических ощущения: как одежда касается кожи и "
        "как ваши стопы уверенно давят на пол. И, наконец, сделайте один осознанный вдох, чувствуя, как "
        "прохладный воздух заходит в ноздри. Вы здесь. Вы в безопасности. Этого на данный момент "
        "достаточно."
    ),
}

# ============================================================
# FREQUENCY
# ============================================================

AFTER_TECHNIQUE_MESSAGE = (
    "Я рада, что вы уделили эти несколько минут себе. Даже если стало легче совсем чуть-чуть — "
    "это уже важная победа над состоянием.\n\n"
    "Такие техники — это бережная \"скорая помощь\". Они помогают не утонуть в моменте, но, к "
    "сожалению, не убирают саму причину, по которой вас \"накрывает\". Если эмоции затапливают "
    "регулярно, значит, внутри накопился критический объем усталости или неразрешенных ситуаций.\n\n"
    "Чтобы я могла лучше понять ваш контекст, скажите — как часто вы ловите себя на таких чувствах "
    "в последнее время?"
)

FREQUENCY_LABELS = {
    "rare": "Это разовый эпизод (редко)",
    "weekly": "Стабильно 1–2 раза в неделю",
    "daily": "Почти каждый день, я в этом живу",
}

# ============================================================
# OFFER & BOOKING
# ============================================================

OFFER_RARE_MESSAGE = (
    "Здорово, что в целом вы справляетесь. Но даже редкие вспышки — это повод прислушаться к себе, "
    "пока они не стали системой. Если почувствуете, что хотите разобраться в причинах глубже и "
    "укрепить свои внутренние опоры — я буду рада помочь вам на консультации. Иногда одного точного "
    "разговора достаточно, чтобы вернуть контроль. Приглашаю вас на короткую ознакомительную встречу "
    "(30 минут)."
)

OFFER_REGULAR_MESSAGE = (
    "Спасибо за честность. Жить в таком режиме — это огромная, изматывающая нагрузка на вашу нервную "
    "систему. Это как ехать на автомобиле, у которого постоянно мигает лампочка перегрева: можно "
    "подливать воды, но нужно чинить мотор.\n\n"
    "Самопомощь — это важно, но в одиночку найти выход из замкнутого круга бывает очень трудно. "
    "Чтобы не довести себя до полного выгорания, я приглашаю вас на короткую ознакомительную встречу "
    "(30 минут).\n\n"
    "Мы в спокойной обстановке разберем вашу ситуацию, найдем главный \"триггер\", который сливает "
    "ваш ресурс, и наметим план, как вернуть вам устойчивость и радость. Это будет бережный "
    "профессиональный разговор, который ни к чему вас не обязывает."
)

BOOKED_MESSAGE = "Принято ✅ Мария свяжется с вами в ближайшее время."

# ============================================================
# BUTTONS
# ============================================================

BUTTON_DONE = "✅ Сделал(а), стало легче"
BUTTON_BOOK = "🗓 Записаться на встречу с Марией"
BUTTON_CONTACT = "Написать Марии"

CALLBACK_ACK = "Ок"
CALLBACK_ACK_BOOKED = "Принято"

# ============================================================
# ERRORS
# ============================================================

ERROR_RESTART_MESSAGE = "Что-то пошло не так. Попробуйте ещё раз: /start"
ERROR_CONTINUE_MESSAGE = "Не получилось продолжить. Давайте заново: /start"

# ============================================================
# OPERATOR
# ============================================================

OPERATOR_TITLE = "Новый лид из бота"
NO_USERNAME = "(без username)"
EMPTY_VALUE = "—"
PROFILE_URL_TEMPLATE = "https://t.me/{username}"

# ============================================================
# DIAGNOSTICS
# ============================================================

HEALTH_TITLE = "healthcheck ✅"
PING_OPERATOR_MESSAGE = "ping ✅ бот может писать в ADMIN_CHAT_ID"
PING_NOT_CONFIGURED = "ADMIN_CHAT_ID не задан ❌"
PING_SENT = "Ок, пинг в админ-чат отправлен ✅"
PING_FAILED = "Пинг не ушёл ❌ См. ошибку в логах."
